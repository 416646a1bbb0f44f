"""
Gemini image generation client.

Wraps ``google-genai`` so callers get the response as a plain tree of
dicts, lists and scalars (camelCase keys, inline bytes as base64 text),
which is what the payload extractor walks.
"""

import logging
import os
from typing import Any

from google import genai
from google.genai import types

from main.config import API_KEY_ALIAS_ENV, API_KEY_ENV, DEFAULT_MODEL


logger = logging.getLogger(__name__)

# Both modalities must be requested to get the inline image back
RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


def response_to_dict(response: Any) -> Any:
    """Convert an SDK response into a JSON-like tree; dicts pass through."""
    if isinstance(response, (dict, list)) or response is None:
        return response
    if hasattr(response, "model_dump"):
        return response.model_dump(mode="json", by_alias=True, exclude_none=True)
    if hasattr(response, "to_json_dict"):
        return response.to_json_dict()
    raise TypeError(f"Unsupported response type: {type(response).__name__}")


class GeminiImageClient:
    """Single-call image generation against an image-capable Gemini model."""

    def __init__(self, client: genai.Client, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    def generate(self, prompt: str) -> dict:
        """
        Ask the model for text and image output for one prompt.

        Network, auth and quota errors raised by the SDK propagate.

        Args:
            prompt: Fully composed prompt text

        Returns:
            The response as a plain dict tree
        """
        logger.debug(f"Calling {self.model} with prompt of {len(prompt)} chars")
        response = self.client.models.generate_content(
            model=self.model,
            contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            config=types.GenerateContentConfig(
                response_modalities=RESPONSE_MODALITIES,
            ),
        )
        return response_to_dict(response)


def build_gemini_image_client(
    model_name: str | None = None,
    **kwargs,
) -> GeminiImageClient:
    """
    Build a ``GeminiImageClient``.

    Uses GEMINI_API_KEY or falls back to GOOGLE_API_KEY when no key is
    passed in.

    Args:
        model_name: Model name (default: DEFAULT_MODEL).
        **kwargs: Additional arguments passed to ``genai.Client``.

    Returns:
        GeminiImageClient ready to generate images.
    """
    model = model_name or DEFAULT_MODEL
    google_api_key = kwargs.pop("google_api_key", None)
    api_key = (
        kwargs.pop("api_key", None)
        or google_api_key
        or os.getenv(API_KEY_ENV)
        or os.getenv(API_KEY_ALIAS_ENV)
    )

    if not api_key:
        raise ValueError("GEMINI_API_KEY or GOOGLE_API_KEY environment variable must be set")

    return GeminiImageClient(genai.Client(api_key=api_key, **kwargs), model=model)
