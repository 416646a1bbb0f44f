"""
Factory utilities for building text-to-image generation clients.

This module exposes a simple factory so that the image generator agent can
request an image model without knowing the underlying provider. Adding new
providers only requires registering another builder in ``factory.py``.
"""

from .factory import (
    available_image_llms,
    create_image_llm,
)

__all__ = ["available_image_llms", "create_image_llm"]
