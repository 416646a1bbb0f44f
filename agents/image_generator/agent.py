"""
Batch image generation.

For every prompt entry, in order: compose the prompt, call the image model,
pull the inline image out of the response, normalize it to the configured
canvas and write it to the output directory. A failing entry is logged and
skipped; the batch always runs to the end.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Protocol, Sequence

from main.config import GeneratorConfig
from LLMs.text2image import create_image_llm
from tools.imageproc import normalize_image
from .extraction import decode_payload, find_image_payload, summarize_response
from .filenames import current_timestamp_ms, resolve_filename
from .prompts import PromptEntry, build_prompt


logger = logging.getLogger(__name__)

IMAGE_MODALITY_HINT = (
    "Hint: make sure the model supports image output and that the request "
    "asked for the IMAGE response modality."
)


class ImageGenerationClient(Protocol):
    def generate(self, prompt: str) -> dict: ...


@dataclass
class EntryFailure:
    """Why one prompt entry produced no file."""

    position: int
    prompt: str
    stage: str  # generation | extraction | processing | write
    message: str


@dataclass
class BatchResult:
    """Outcome of a batch run."""

    total: int = 0
    saved: List[Path] = field(default_factory=list)
    failures: List[EntryFailure] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.saved)


def _fail(result: BatchResult, position: int, prompt: str, stage: str, message: str) -> None:
    result.failures.append(EntryFailure(position=position, prompt=prompt, stage=stage, message=message))


def generate_and_save_images(
    entries: Sequence[PromptEntry],
    config: GeneratorConfig,
    client: ImageGenerationClient | None = None,
    clock: Callable[[], int] | None = None,
) -> BatchResult:
    """
    Generate one image per prompt entry and save it to ``config.output_dir``.

    Args:
        entries: Prompt entries, processed in order
        config: Generator configuration
        client: Image generation client (default: Gemini client built from config)
        clock: Returns the epoch timestamp in milliseconds (default: wall clock)

    Returns:
        BatchResult with saved paths and per-entry failures
    """
    clock = clock or current_timestamp_ms
    if client is None:
        client = create_image_llm("gemini", model_name=config.model, api_key=config.api_key)

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    result = BatchResult(total=len(entries))
    logger.info(f"🎨 Generating {len(entries)} images with model {config.model}...")
    logger.info(f"   Output directory: {output_dir}")

    for position, entry in enumerate(entries, 1):
        logger.info(f"[{position}/{len(entries)}] Processing prompt: \"{entry.prompt}\"")
        prompt = build_prompt(entry.prompt, config.prompt, config.image)

        # 1. Generation
        try:
            response = client.generate(prompt)
        except Exception as e:
            logger.error(f"❌ Error generating image for prompt \"{entry.prompt}\": {e}")
            _fail(result, position, entry.prompt, "generation", str(e))
            continue

        # 2. Extraction
        payload = find_image_payload(response)
        if payload is None:
            summary = summarize_response(response)
            logger.warning(
                f"⚠️ No image found in response for prompt \"{entry.prompt}\". "
                f"candidates={summary['candidateCount']}"
            )
            logger.debug(f"Response summary (no base64 included): {json.dumps(summary, indent=2)}")
            logger.info(IMAGE_MODALITY_HINT)
            _fail(result, position, entry.prompt, "extraction", "no image payload in response")
            continue

        # 3. Decode + normalize
        try:
            image_bytes = normalize_image(decode_payload(payload), config.image)
        except Exception as e:
            logger.error(f"❌ Error converting image to JPEG for prompt \"{entry.prompt}\": {e}")
            _fail(result, position, entry.prompt, "processing", str(e))
            continue

        # 4. Write
        filename = resolve_filename(
            position,
            entry.filename,
            clock(),
            run_id=config.run_id,
            extension=config.image.extension,
        )
        file_path = output_dir / filename
        try:
            file_path.write_bytes(image_bytes)
        except OSError as e:
            logger.error(f"❌ Error writing {file_path}: {e}")
            _fail(result, position, entry.prompt, "write", str(e))
            continue

        logger.info(f"[OK] Image saved to: {file_path}")
        result.saved.append(file_path)

    logger.info(f"✨ Image generation finished. Saved {result.success_count}/{result.total} images.")
    for failure in result.failures:
        logger.info(f"   - entry {failure.position} failed at {failure.stage}: {failure.message}")

    return result
