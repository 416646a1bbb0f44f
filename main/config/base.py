"""
Main GeneratorConfig class that composes the image and prompt sub-configurations.

Flat keyword aliases (``width=``, ``style=`` ...) are accepted and folded
into the nested configs, so CLI code can build a config from parsed args
without knowing the nested layout.
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .image import ImageConfig
from .prompt import PromptStyleConfig


DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_OUTPUT_DIR = "images"

API_KEY_ENV = "GEMINI_API_KEY"
# Some clients and tools only read this name
API_KEY_ALIAS_ENV = "GOOGLE_API_KEY"
CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"
RUN_ID_ENV = "SERIAL"
MODEL_ENV = "GEMINI_IMAGE_MODEL_NAME"
OUTPUT_DIR_ENV = "IMAGE_OUTPUT_DIR"


# Mapping of flat field names to (nested_config_name, nested_field_name)
_FLAT_TO_NESTED: dict[str, tuple[str, str]] = {
    # Image
    "width": ("image", "width"),
    "height": ("image", "height"),
    "background": ("image", "background"),
    "quality": ("image", "quality"),
    "extension": ("image", "extension"),
    # Prompt
    "style": ("prompt", "style"),
    "constraints": ("prompt", "constraints"),
}


def load_environment(dotenv_path: str | None = None) -> None:
    """
    Load a ``.env`` file into the process environment and mirror the API key.

    Existing environment variables win over values from the file. When
    ``GEMINI_API_KEY`` is present its value is also exposed as
    ``GOOGLE_API_KEY``.
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)
    api_key = os.getenv(API_KEY_ENV, "")
    if api_key:
        os.environ[API_KEY_ALIAS_ENV] = api_key


class GeneratorConfig(BaseModel):
    """Configuration for one batch image generation run.

    Not modified after initialization.
    """

    model: str = Field(default=DEFAULT_MODEL, description="Image-capable Gemini model")
    output_dir: Path = Field(default=Path(DEFAULT_OUTPUT_DIR), description="Directory images are written to")
    run_id: str = Field(default="", description="Optional run identifier prefixed to filenames")
    api_key: str | None = Field(default=None, description="Gemini API key (default: GEMINI_API_KEY, then GOOGLE_API_KEY)")

    image: ImageConfig = Field(default_factory=ImageConfig)
    prompt: PromptStyleConfig = Field(default_factory=PromptStyleConfig)

    @model_validator(mode="before")
    @classmethod
    def _convert_flat_to_nested(cls, data: Any) -> Any:
        """Fold flat keyword aliases into the nested configs.

        ``None`` values are dropped so unset CLI options keep the defaults.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)
        nested_updates: dict[str, dict[str, Any]] = {}

        for flat_key, (nested_name, nested_field) in _FLAT_TO_NESTED.items():
            if flat_key not in data:
                continue
            value = data.pop(flat_key)
            if value is None:
                continue
            nested_updates.setdefault(nested_name, {})[nested_field] = value

        for nested_name, updates in nested_updates.items():
            existing = data.get(nested_name)
            if existing is None:
                data[nested_name] = updates
            elif isinstance(existing, dict):
                data[nested_name] = {**existing, **updates}
            else:
                # Already a config object
                data[nested_name] = {**existing.model_dump(), **updates}

        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """
        Build a config from environment variables, with keyword overrides.

        Reads ``GEMINI_API_KEY`` (falling back to ``GOOGLE_API_KEY``),
        ``SERIAL``, ``GEMINI_IMAGE_MODEL_NAME`` and ``IMAGE_OUTPUT_DIR``.
        Overrides set to ``None`` are ignored.
        """
        values: dict[str, Any] = {
            "model": os.getenv(MODEL_ENV) or None,
            "output_dir": os.getenv(OUTPUT_DIR_ENV) or None,
            "run_id": os.getenv(RUN_ID_ENV) or None,
            "api_key": os.getenv(API_KEY_ENV) or os.getenv(API_KEY_ALIAS_ENV) or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
