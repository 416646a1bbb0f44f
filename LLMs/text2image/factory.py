from typing import Callable, Dict

from .gemini.client import GeminiImageClient, build_gemini_image_client

Builder = Callable[..., GeminiImageClient]

BUILDERS: Dict[str, Builder] = {
    "gemini": build_gemini_image_client,
}


def available_image_llms() -> list[str]:
    """Return the list of registered image generation providers."""
    return sorted(BUILDERS.keys())


def create_image_llm(provider: str = "gemini", **kwargs) -> GeminiImageClient:
    """
    Instantiate an image generation client using the registered builders.

    Args:
        provider: Image generation provider name (gemini).
        **kwargs: Extra keyword arguments forwarded to the underlying builder.

    Returns:
        A client exposing ``generate(prompt) -> dict``.
    """
    if not provider:
        available = ", ".join(available_image_llms())
        raise ValueError(f"Provider is required. Available providers: {available}")

    key = provider.lower()
    try:
        builder = BUILDERS[key]
    except KeyError as exc:
        available = ", ".join(available_image_llms())
        raise ValueError(
            f"Unsupported image LLM provider '{provider}'. "
            f"Available providers: {available}"
        ) from exc

    return builder(**kwargs)
