import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from main.config import ImageConfig, PromptStyleConfig


# ---- Prompt Entry ----
class PromptEntry(BaseModel):
    """One unit of work: a prompt plus an optional filename template.

    ``filename`` may contain ``{timestamp}``, replaced with the epoch time in
    milliseconds when the image is saved.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., description="Description of the image to generate")
    filename: str | None = Field(default=None, description="Requested output filename template")

    @field_validator("prompt")
    @classmethod
    def _non_blank_prompt(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("prompt must not be empty")
        return v

    @field_validator("filename", mode="before")
    @classmethod
    def _blank_filename_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ---- Built-in prompts ----
DEFAULT_PROMPTS: List[PromptEntry] = [
    PromptEntry(prompt="A wooden ruler lying on a school desk", filename="ruler_{timestamp}.jpg"),
    PromptEntry(prompt="A red rocket taking off over a small town"),
]


def build_prompt(
    base_prompt: str,
    style: PromptStyleConfig,
    image: ImageConfig | None = None,
) -> str:
    """
    Compose the full prompt sent to the image model.

    Args:
        base_prompt: The entry's own description
        style: Style and constraints to enforce
        image: Canvas settings announced in the constraints (default: ImageConfig())

    Returns:
        ``{base_prompt} -- Style: "{style}". {constraints}``
    """
    image = image or ImageConfig()
    constraints = style.render_constraints(image.width, image.height)
    return f'{base_prompt} -- Style: "{style.style}". {constraints}'


def _to_entry(item: Any, position: int) -> PromptEntry:
    if isinstance(item, PromptEntry):
        return item
    if isinstance(item, str):
        return PromptEntry(prompt=item)
    if isinstance(item, Mapping) and "prompt" in item:
        return PromptEntry(prompt=item["prompt"], filename=item.get("filename"))
    raise ValueError(
        f"Prompt entry {position} must be a string or an object with a 'prompt' key, "
        f"got {type(item).__name__}"
    )


def _read_prompt_file(path: Path) -> List[Any]:
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".jsonl":
            return [json.loads(line) for line in f if line.strip()]
        data = json.load(f)

    if isinstance(data, Mapping) and "prompts" in data:
        data = data["prompts"]
    if not isinstance(data, list):
        raise ValueError(f"Prompt file {path} must contain a JSON list of entries")
    return data


def load_prompt_entries(source: str | Path | Iterable[Any] | None = None) -> List[PromptEntry]:
    """
    Normalize prompts into ``PromptEntry`` records, once, in order.

    Args:
        source: ``None`` for DEFAULT_PROMPTS, a path to a ``.json`` (list, or
            object with a ``prompts`` list) or ``.jsonl`` file, or an iterable
            of strings / mappings / PromptEntry

    Returns:
        List of PromptEntry in source order

    Raises:
        FileNotFoundError: prompt file does not exist
        ValueError: unreadable or malformed file, or invalid entry
    """
    if source is None:
        return list(DEFAULT_PROMPTS)

    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            items: Sequence[Any] = _read_prompt_file(path)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in prompt file {path}: {e}") from e
        except FileNotFoundError:
            raise
        except OSError as e:
            raise ValueError(f"Could not read prompt file {path}: {e}") from e
    else:
        items = list(source)

    entries = []
    for position, item in enumerate(items, 1):
        try:
            entries.append(_to_entry(item, position))
        except ValueError as e:
            # pydantic's ValidationError is a ValueError too
            raise ValueError(f"Invalid prompt entry {position}: {e}") from e
    return entries
