import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent))

from helpers import encode_image  # noqa: E402


@pytest.fixture
def png_bytes():
    return encode_image()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in (
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "GOOGLE_APPLICATION_CREDENTIALS",
        "SERIAL",
        "GEMINI_IMAGE_MODEL_NAME",
        "IMAGE_OUTPUT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
