"""
Credential diagnostics.

Reports which credential-related environment variables are set (never the
API key itself) and summarizes the service account file pointed to by
GOOGLE_APPLICATION_CREDENTIALS.
"""

import json
import logging
import os
from typing import Callable, Mapping

from pydantic import BaseModel, Field

from main.config import API_KEY_ENV, CREDENTIALS_ENV, RUN_ID_ENV


logger = logging.getLogger(__name__)

NOT_SET = "(not set)"
NOT_FOUND = "(not found)"
SUMMARY_FIELDS = ("project_id", "client_email", "type")

SETUP_HINTS = [
    "You can set GOOGLE_APPLICATION_CREDENTIALS in a POSIX shell like:",
    'export GOOGLE_APPLICATION_CREDENTIALS="/path/to/service-account.json"',
    "Or in PowerShell:",
    '$env:GOOGLE_APPLICATION_CREDENTIALS = "C:\\path\\to\\service-account.json"',
]


class CredentialsReport(BaseModel):
    """What was found in the environment and the credentials file."""

    credentials_path: str | None = Field(default=None, description="GOOGLE_APPLICATION_CREDENTIALS value")
    api_key_present: bool = Field(default=False, description="Whether GEMINI_API_KEY is set")
    run_id: str | None = Field(default=None, description="SERIAL value")
    service_account: dict[str, str] | None = Field(
        default=None,
        description="project_id / client_email / type from the credentials file"
    )
    error: str | None = Field(default=None, description="Read/parse error for the credentials file")


def environment_lines(environ: Mapping[str, str]) -> list[str]:
    """Summary lines for the recognized environment variables."""
    return [
        "--- Environment variables ---",
        f"{CREDENTIALS_ENV} = {environ.get(CREDENTIALS_ENV) or NOT_SET}",
        f"{API_KEY_ENV} present = {'YES' if environ.get(API_KEY_ENV) else 'NO'}",
        f"{RUN_ID_ENV} = {environ.get(RUN_ID_ENV) or NOT_SET}",
    ]


def read_service_account(path: str) -> dict[str, str]:
    """
    Read a service account JSON file and pick the summary fields.

    Raises:
        OSError: file cannot be read
        ValueError: file is not a JSON object
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return {key: str(data.get(key) or NOT_FOUND) for key in SUMMARY_FIELDS}


def inspect_credentials(
    environ: Mapping[str, str] | None = None,
    echo: Callable[[str], None] = print,
) -> CredentialsReport:
    """
    Print credential diagnostics and return them as a report.

    The environment summary is always emitted first. A credentials file that
    cannot be read or parsed is logged as a single error line; it is never
    fatal.

    Args:
        environ: Environment to inspect (default: os.environ)
        echo: Output function for report lines

    Returns:
        CredentialsReport
    """
    environ = os.environ if environ is None else environ

    report = CredentialsReport(
        credentials_path=environ.get(CREDENTIALS_ENV) or None,
        api_key_present=bool(environ.get(API_KEY_ENV)),
        run_id=environ.get(RUN_ID_ENV) or None,
    )

    for line in environment_lines(environ):
        echo(line)
    echo("")

    if report.credentials_path:
        try:
            report.service_account = read_service_account(report.credentials_path)
        except (OSError, ValueError) as e:
            report.error = str(e)
            logger.error(f"Could not read/parse {CREDENTIALS_ENV} file: {e}")
        else:
            echo("--- Service account JSON summary ---")
            for key, value in report.service_account.items():
                echo(f"{key}: {value}")
    else:
        echo(
            f"No {CREDENTIALS_ENV} file set; Application Default Credentials will be "
            "looked up from other sources (gcloud, metadata server, etc.)"
        )

    echo("")
    for line in SETUP_HINTS:
        echo(line)

    return report
