"""
Generator configuration models.

This module provides the configuration classes for a batch image run.
The main GeneratorConfig class composes the image and prompt settings.
"""

from .image import ImageConfig
from .prompt import PromptStyleConfig
from .base import (
    GeneratorConfig,
    load_environment,
    DEFAULT_MODEL,
    API_KEY_ENV,
    API_KEY_ALIAS_ENV,
    CREDENTIALS_ENV,
    RUN_ID_ENV,
)

__all__ = [
    "ImageConfig",
    "PromptStyleConfig",
    "GeneratorConfig",
    "load_environment",
    "DEFAULT_MODEL",
    "API_KEY_ENV",
    "API_KEY_ALIAS_ENV",
    "CREDENTIALS_ENV",
    "RUN_ID_ENV",
]
