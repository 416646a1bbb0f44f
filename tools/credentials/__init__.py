"""Inspect locally configured Google credentials."""

from .inspector import (
    CredentialsReport,
    inspect_credentials,
    environment_lines,
    read_service_account,
)

__all__ = [
    "CredentialsReport",
    "inspect_credentials",
    "environment_lines",
    "read_service_account",
]
