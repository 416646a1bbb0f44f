"""Output image configuration."""

from pydantic import BaseModel, Field, field_validator


# Output extension -> Pillow encoder
SAVE_FORMATS: dict[str, str] = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".webp": "WEBP",
}


class ImageConfig(BaseModel):
    """Canvas, background and encoding settings for generated images."""

    width: int = Field(default=495, ge=1, description="Target canvas width in pixels")
    height: int = Field(default=750, ge=1, description="Target canvas height in pixels")
    background: str = Field(
        default="#F7F7F7",
        description="Solid light color used for padding and to flatten transparency"
    )
    quality: int = Field(default=90, ge=1, le=100, description="Encoding quality (JPEG / WEBP)")
    extension: str = Field(
        default=".jpg",
        description="Extension every output filename ends with; also selects the encoder"
    )

    @field_validator("extension")
    @classmethod
    def _supported_extension(cls, v: str) -> str:
        v = v.lower()
        if v not in SAVE_FORMATS:
            supported = ", ".join(SAVE_FORMATS)
            raise ValueError(f"Unsupported extension '{v}'. Supported: {supported}")
        return v

    @property
    def save_format(self) -> str:
        """Pillow format name matching ``extension``."""
        return SAVE_FORMATS[self.extension]
