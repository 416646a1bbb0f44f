"""
Image Generator Agent using the Gemini image models.

This agent turns a list of prompts into images: it enforces a common style,
calls Gemini, extracts the inline image from the response, normalizes it to
a fixed JPEG canvas and saves it with a derived filename.
"""

from .agent import (
    generate_and_save_images,
    BatchResult,
    EntryFailure,
)
from .extraction import ImagePayload, find_image_payload, summarize_response
from .filenames import resolve_filename
from .prompts import PromptEntry, build_prompt, load_prompt_entries

__all__ = [
    "generate_and_save_images",
    "BatchResult",
    "EntryFailure",
    "ImagePayload",
    "find_image_payload",
    "summarize_response",
    "resolve_filename",
    "PromptEntry",
    "build_prompt",
    "load_prompt_entries",
]
