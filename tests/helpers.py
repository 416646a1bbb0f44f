import base64
import io

from PIL import Image


def encode_image(size=(64, 32), mode="RGB", color=(200, 30, 30), fmt="PNG") -> bytes:
    img = Image.new(mode, size, color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def image_part(data: bytes, mime_type: str = "image/png") -> dict:
    return {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(data).decode("ascii")}}


def image_response(data: bytes, mime_type: str = "image/png", text: str = "Here you go") -> dict:
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}, image_part(data, mime_type)]}}
        ],
        "modelVersion": "gemini-2.5-flash-image",
    }


class FakeImageClient:
    """Returns queued responses (or raises queued exceptions) in call order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt: str) -> dict:
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
