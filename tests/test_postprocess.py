import io

import pytest
from PIL import Image

from main.config import ImageConfig
from tools.imageproc import normalize_image
from helpers import encode_image


def _open(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


@pytest.mark.parametrize("size", [(64, 32), (32, 64), (1000, 1000), (10, 10), (495, 750)])
def test_output_has_exact_canvas_size(size):
    out = _open(normalize_image(encode_image(size=size)))
    assert out.size == (495, 750)
    assert out.format == "JPEG"
    assert out.mode == "RGB"


def test_custom_canvas():
    config = ImageConfig(width=100, height=40, quality=70)
    out = _open(normalize_image(encode_image(size=(30, 30)), config))
    assert out.size == (100, 40)


def test_letterbox_padding_uses_background():
    # Wide red image on a tall canvas: top and bottom are padding
    out = _open(normalize_image(encode_image(size=(200, 100), color=(255, 0, 0))))
    top = out.getpixel((247, 5))
    middle = out.getpixel((247, 375))
    assert all(abs(a - b) <= 8 for a, b in zip(top, (0xF7, 0xF7, 0xF7)))
    assert middle[0] > 200 and middle[1] < 60


def test_transparency_is_flattened_onto_background():
    transparent = encode_image(size=(50, 75), mode="RGBA", color=(0, 0, 0, 0))
    out = _open(normalize_image(transparent))
    center = out.getpixel((247, 375))
    assert all(abs(a - b) <= 8 for a, b in zip(center, (0xF7, 0xF7, 0xF7)))


def test_accepts_other_input_formats():
    out = _open(normalize_image(encode_image(fmt="JPEG")))
    assert out.size == (495, 750)


def test_undecodable_bytes_raise():
    # PIL.UnidentifiedImageError is an OSError
    with pytest.raises(OSError):
        normalize_image(b"definitely not an image")


@pytest.mark.parametrize("extension, fmt", [(".png", "PNG"), (".webp", "WEBP"), (".jpeg", "JPEG")])
def test_encoded_format_follows_extension(extension, fmt):
    out = _open(normalize_image(encode_image(), ImageConfig(extension=extension)))
    assert out.format == fmt
    assert out.size == (495, 750)
