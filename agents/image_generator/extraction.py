"""
Locate the inline image payload in a generation response.

The response is a plain tree of dicts, lists and scalars. The expected
location is ``candidates[0].content.parts[*].inlineData``; when the API
shape drifts, a bounded depth-first search over the whole tree is used.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Callable, List


MAX_SEARCH_DEPTH = 8
TEXT_PREVIEW_CHARS = 120
MAX_TOP_KEYS = 20


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image data together with its declared media type."""

    mime_type: str
    data: str


def _inline_data(node: Any) -> dict | None:
    if not isinstance(node, dict):
        return None
    inline = node.get("inlineData", node.get("inline_data"))
    return inline if isinstance(inline, dict) else None


def _mime_type(inline: dict) -> Any:
    return inline.get("mimeType", inline.get("mime_type"))


def is_image_part(node: Any) -> bool:
    """True when ``node`` carries inline data whose media type starts with ``image/``."""
    inline = _inline_data(node)
    if inline is None:
        return False
    mime_type = _mime_type(inline)
    return isinstance(mime_type, str) and mime_type.startswith("image/")


def find_direct_image_part(response: Any) -> dict | None:
    """Return the first image part of the first candidate, if the shape allows it."""
    if not isinstance(response, dict):
        return None
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    for part in parts:
        if is_image_part(part):
            return part
    return None


def search_tree(
    node: Any,
    predicate: Callable[[Any], bool],
    max_depth: int = MAX_SEARCH_DEPTH,
    depth: int = 0,
) -> Any:
    """
    Pre-order depth-first search for the first node matching ``predicate``.

    Lists are walked in index order and dict values in key order. The root is
    at depth 0; nodes deeper than ``max_depth`` are never inspected.
    """
    if node is None or depth > max_depth:
        return None
    if isinstance(node, list):
        for item in node:
            found = search_tree(item, predicate, max_depth, depth + 1)
            if found is not None:
                return found
    elif isinstance(node, dict):
        if predicate(node):
            return node
        for value in node.values():
            found = search_tree(value, predicate, max_depth, depth + 1)
            if found is not None:
                return found
    return None


def find_image_payload(response: Any, max_depth: int = MAX_SEARCH_DEPTH) -> ImagePayload | None:
    """
    Find the image payload in a response.

    Tries the expected candidate/content/parts path first, then a bounded
    structural search.

    Returns:
        ImagePayload, or None when no image part exists (or it has no data)
    """
    part = find_direct_image_part(response)
    if part is None:
        part = search_tree(response, is_image_part, max_depth=max_depth)
    if part is None:
        return None

    inline = _inline_data(part)
    data = inline.get("data")
    if not isinstance(data, str) or not data:
        return None
    return ImagePayload(mime_type=_mime_type(inline), data=data)


def decode_payload(payload: ImagePayload) -> bytes:
    """
    Decode the base64 payload; accepts standard and URL-safe alphabets.

    Raises:
        ValueError: data is not valid base64
    """
    data = "".join(payload.data.split()).replace("-", "+").replace("_", "/")
    data += "=" * (-len(data) % 4)
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def summarize_response(response: Any) -> dict:
    """
    Describe the response shape for debugging, without any payload bytes.

    Returns:
        ``{"topKeys": [...], "candidateCount": n, "candidates": [...]}`` with
        per-part text previews, mime types and data lengths
    """
    top_keys = list(response.keys())[:MAX_TOP_KEYS] if isinstance(response, dict) else []
    candidates = response.get("candidates") if isinstance(response, dict) else None
    if not isinstance(candidates, list):
        candidates = []

    summaries: List[dict] = []
    for idx, candidate in enumerate(candidates):
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            parts = []

        part_summaries = []
        for part in parts:
            part = part if isinstance(part, dict) else {}
            text = part.get("text")
            inline = _inline_data(part) or {}
            data = inline.get("data")
            part_summaries.append({
                "textPreview": text[:TEXT_PREVIEW_CHARS] if isinstance(text, str) else None,
                "mimeType": _mime_type(inline),
                "dataLength": len(data) if data else None,
            })

        summaries.append({
            "candidateIndex": idx,
            "partsCount": len(parts),
            "parts": part_summaries,
        })

    return {
        "topKeys": top_keys,
        "candidateCount": len(candidates),
        "candidates": summaries,
    }
