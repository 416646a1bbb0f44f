"""
CLI for inspecting credential configuration.

Usage:
    python -m tools.credentials
    python -m tools.credentials --json
"""

import argparse
import json
import logging

from main.config import load_environment
from .inspector import inspect_credentials


def main():
    parser = argparse.ArgumentParser(
        description="Show which Gemini / Google credentials are configured",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tools.credentials
  python -m tools.credentials --json
        """
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the report as JSON"
    )

    parser.add_argument(
        "--no-dotenv",
        action="store_true",
        help="Do not load a .env file before inspecting"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s"
    )

    if not args.no_dotenv:
        load_environment()

    if args.json:
        report = inspect_credentials(echo=lambda _line: None)
        print(json.dumps(report.model_dump(), indent=2, ensure_ascii=False))
    else:
        inspect_credentials()


if __name__ == "__main__":
    main()
