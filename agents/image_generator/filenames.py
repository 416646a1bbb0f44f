"""Output filename resolution."""

import re
import time


TIMESTAMP_PLACEHOLDER = "{timestamp}"
DEFAULT_EXTENSION = ".jpg"

_TRAILING_EXTENSION = re.compile(r"\.[^.]+$")


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def ensure_extension(filename: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Replace any other trailing extension with ``extension``. Idempotent."""
    if filename.lower().endswith(extension.lower()):
        return filename
    return _TRAILING_EXTENSION.sub("", filename) + extension


def resolve_filename(
    position: int,
    template: str | None,
    timestamp_ms: int,
    run_id: str = "",
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """
    Resolve the filename for one generated image.

    Args:
        position: 1-based entry number in the batch
        template: Requested filename, may contain ``{timestamp}``
        timestamp_ms: Value substituted for every ``{timestamp}``
        run_id: Optional run identifier; prefixed as ``"<run_id>_"``
        extension: Required extension, including the dot

    Returns:
        Filename ending in ``extension`` exactly once
    """
    run_prefix = f"{run_id}_" if run_id else ""

    if not template:
        return f"image_{position}_{run_prefix}{timestamp_ms}{extension}"

    filename = template.replace(TIMESTAMP_PLACEHOLDER, str(timestamp_ms))
    filename = ensure_extension(filename, extension)
    if run_prefix and not filename.startswith(run_prefix):
        filename = run_prefix + filename
    return filename
