"""
Normalize generated images to a fixed canvas.

The model does not reliably honor the requested size, so every image is
contain-fitted onto an exact ``width x height`` canvas, transparency is
flattened onto a light solid color, and the result is re-encoded in the
format matching the output extension (JPEG by default).
"""

import io

from PIL import Image, ImageColor, ImageOps

from main.config import ImageConfig


def flatten_transparency(img: Image.Image, background: str) -> Image.Image:
    """Composite any alpha channel onto ``background`` and return an RGB image."""
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")

    if img.mode in ("RGBA", "LA", "PA"):
        rgba = img.convert("RGBA")
        canvas = Image.new("RGBA", rgba.size, ImageColor.getrgb(background))
        canvas.alpha_composite(rgba)
        return canvas.convert("RGB")

    return img.convert("RGB")


def fit_to_canvas(img: Image.Image, width: int, height: int, background: str) -> Image.Image:
    """Contain-fit ``img`` (scaling up or down) and pad it, centered, to exactly ``width x height``."""
    return ImageOps.pad(
        img,
        (width, height),
        method=Image.Resampling.LANCZOS,
        color=ImageColor.getrgb(background),
        centering=(0.5, 0.5),
    )


def normalize_image(raw: bytes, config: ImageConfig | None = None) -> bytes:
    """
    Decode, fit, flatten and re-encode an image.

    Args:
        raw: Decoded image bytes in any format Pillow can read
        config: Target canvas and encoding (default: ImageConfig())

    Returns:
        Bytes in ``config.save_format`` of exactly ``config.width x config.height``

    Raises:
        PIL.UnidentifiedImageError / OSError: bytes cannot be decoded or encoded
    """
    config = config or ImageConfig()

    with Image.open(io.BytesIO(raw)) as img:
        img = ImageOps.exif_transpose(img)
        flat = flatten_transparency(img, config.background)

    fitted = fit_to_canvas(flat, config.width, config.height, config.background)

    buffer = io.BytesIO()
    if config.save_format == "PNG":
        fitted.save(buffer, format="PNG")
    else:
        fitted.save(buffer, format=config.save_format, quality=config.quality)
    return buffer.getvalue()
