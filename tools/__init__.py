"""Tools module for image generator utilities."""

from .imageproc import normalize_image
from .credentials import inspect_credentials

__all__ = [
    "normalize_image",
    "inspect_credentials",
]
