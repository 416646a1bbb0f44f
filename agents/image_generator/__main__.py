"""
CLI for the Gemini Image Generator Agent.

Usage:
    # Generate the built-in prompts into ./images
    python -m agents.image_generator

    # Generate prompts from a file
    python -m agents.image_generator --prompts prompts.json

    # Namespace filenames with a run identifier (default: SERIAL env var)
    python -m agents.image_generator --prompts prompts.jsonl --run-id batch7

    # Dry run (compose prompts and filenames only, no generation)
    python -m agents.image_generator --prompts prompts.json --dry-run

    # List the prompts without generating
    python -m agents.image_generator --prompts prompts.json --list-prompts
"""

import argparse
import logging
import sys
from pathlib import Path

from main.config import DEFAULT_MODEL, GeneratorConfig, load_environment
from .agent import generate_and_save_images
from .filenames import current_timestamp_ms, resolve_filename
from .prompts import PromptEntry, build_prompt, load_prompt_entries


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate style-consistent images from prompts using Gemini",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Generate images for the prompts in a file
    python -m agents.image_generator --prompts prompts.json

    # Dry run to see what would be generated
    python -m agents.image_generator --prompts prompts.json --dry-run

    # Bigger canvas, different style
    python -m agents.image_generator --width 1024 --height 1024 --style "Watercolor"
        """,
    )

    parser.add_argument(
        "--prompts", "-p",
        type=str,
        default=None,
        help="JSON or JSONL file with prompt entries (default: built-in prompts)"
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        default=None,
        help="Directory for generated images (default: IMAGE_OUTPUT_DIR env var or ./images)"
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help=f"Gemini model for image generation (default: {DEFAULT_MODEL})"
    )

    parser.add_argument(
        "--run-id",
        type=str,
        default=None,
        help="Run identifier prefixed to filenames (default: SERIAL env var)"
    )

    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Gemini API key (default: GEMINI_API_KEY, then GOOGLE_API_KEY env var)"
    )

    parser.add_argument("--width", type=int, default=None, help="Output width in pixels (default: 495)")
    parser.add_argument("--height", type=int, default=None, help="Output height in pixels (default: 750)")
    parser.add_argument("--quality", type=int, default=None, help="JPEG/WEBP quality 1-100 (default: 90)")
    parser.add_argument("--style", type=str, default=None, help="Style enforced on every image")

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compose prompts and filenames without generating images"
    )

    parser.add_argument(
        "--list-prompts",
        action="store_true",
        help="List all prompt entries and exit"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (includes response summaries)"
    )

    return parser.parse_args(argv)


def list_prompts(entries: list[PromptEntry]) -> int:
    """List all prompt entries."""
    if not entries:
        print("⚠️ No prompts found")
        return 0

    print(f"📝 Found {len(entries)} prompts:\n")
    for i, entry in enumerate(entries, 1):
        print(f"{i:3d}. {entry.prompt}")
        print(f"     Filename: {entry.filename or '(auto)'}")
        print()
    return 0


def dry_run(entries: list[PromptEntry], config: GeneratorConfig) -> int:
    """Print the composed prompt and resolved filename of every entry."""
    timestamp = current_timestamp_ms()
    for i, entry in enumerate(entries, 1):
        filename = resolve_filename(
            i, entry.filename, timestamp, run_id=config.run_id, extension=config.image.extension
        )
        print(f"{i:3d}. {Path(config.output_dir) / filename}")
        print(f"     Prompt: {build_prompt(entry.prompt, config.prompt, config.image)}")
        print()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    load_environment()

    try:
        entries = load_prompt_entries(args.prompts)
        config = GeneratorConfig.from_env(
            model=args.model,
            output_dir=args.output_dir,
            run_id=args.run_id,
            api_key=args.api_key,
            width=args.width,
            height=args.height,
            quality=args.quality,
            style=args.style,
        )
    except (OSError, ValueError) as e:
        print(f"❌ {e}")
        return 1

    if args.list_prompts:
        return list_prompts(entries)

    if args.dry_run:
        return dry_run(entries, config)

    if not config.api_key:
        print("❌ GEMINI_API_KEY (or GOOGLE_API_KEY) environment variable not set")
        print("   Set it with: export GEMINI_API_KEY='your-api-key'")
        return 1

    generate_and_save_images(entries, config)
    print("\n✨ Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
