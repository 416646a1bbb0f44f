import base64
import logging

from PIL import Image

from agents.image_generator import PromptEntry, generate_and_save_images
from main.config import GeneratorConfig
from helpers import FakeImageClient, encode_image, image_part, image_response


def _config(tmp_path, **kwargs):
    return GeneratorConfig(output_dir=tmp_path / "images", **kwargs)


def test_saves_one_jpeg_per_entry(tmp_path):
    entries = [
        PromptEntry(prompt="a ruler", filename="ruler.png"),
        PromptEntry(prompt="a rocket"),
    ]
    client = FakeImageClient([
        image_response(encode_image(size=(100, 50))),
        image_response(encode_image(size=(20, 90)), mime_type="image/jpeg"),
    ])

    result = generate_and_save_images(
        entries, _config(tmp_path, run_id="run1"), client=client, clock=lambda: 1700000000000
    )

    out_dir = tmp_path / "images"
    assert result.saved == [out_dir / "run1_ruler.jpg", out_dir / "image_2_run1_1700000000000.jpg"]
    assert result.failures == []
    for path in result.saved:
        with Image.open(path) as img:
            assert img.size == (495, 750)
            assert img.format == "JPEG"


def test_prompts_carry_style_and_constraints(tmp_path):
    client = FakeImageClient([image_response(encode_image())])
    config = _config(tmp_path, style="Ink Sketch", width=300, height=300)

    generate_and_save_images([PromptEntry(prompt="a cat")], config, client=client)

    assert client.prompts == [
        'a cat -- Style: "Ink Sketch". ' + config.prompt.render_constraints(300, 300)
    ]
    assert "300px wide by 300px tall" in client.prompts[0]


def test_failures_are_isolated_and_write_nothing(tmp_path, caplog):
    entries = [PromptEntry(prompt=p) for p in ["boom", "no image", "bad bytes", "bad b64", "fine"]]
    client = FakeImageClient([
        RuntimeError("quota exceeded"),
        {"candidates": [{"content": {"parts": [{"text": "I cannot draw that"}]}}]},
        {"candidates": [{"content": {"parts": [image_part(b"not an image")]}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "%%%"}}]}}]},
        image_response(encode_image()),
    ])

    with caplog.at_level(logging.DEBUG):
        result = generate_and_save_images(entries, _config(tmp_path), client=client, clock=lambda: 7)

    assert [f.stage for f in result.failures] == ["generation", "extraction", "processing", "processing"]
    assert [f.position for f in result.failures] == [1, 2, 3, 4]
    assert result.saved == [tmp_path / "images" / "image_5_7.jpg"]
    assert sorted(p.name for p in (tmp_path / "images").iterdir()) == ["image_5_7.jpg"]

    messages = caplog.text
    assert "quota exceeded" in messages
    assert "No image found in response" in messages
    assert "I cannot draw that" in messages  # text preview in the debug summary
    assert "Saved 1/5 images" in messages


def test_every_entry_produces_file_or_diagnostic(tmp_path, caplog):
    entries = [PromptEntry(prompt=f"p{i}") for i in range(4)]
    client = FakeImageClient([
        image_response(encode_image()),
        {},
        ConnectionError("offline"),
        image_response(encode_image()),
    ])

    with caplog.at_level(logging.WARNING):
        result = generate_and_save_images(entries, _config(tmp_path), client=client, clock=lambda: 1)

    assert result.success_count + len(result.failures) == result.total == 4
    assert len(list((tmp_path / "images").iterdir())) == result.success_count == 2
    assert len([r for r in caplog.records if r.levelno >= logging.WARNING]) == 2


def test_summary_never_logs_payload(tmp_path, caplog):
    secret = base64.b64encode(b"payload bytes that are not an image prefix").decode()
    response = {"candidates": [{"content": {"parts": [
        {"inlineData": {"mimeType": "text/plain", "data": secret}}
    ]}}]}

    with caplog.at_level(logging.DEBUG):
        generate_and_save_images(
            [PromptEntry(prompt="x")], _config(tmp_path), client=FakeImageClient([response])
        )

    assert secret not in caplog.text
    assert "text/plain" in caplog.text


def test_output_dir_is_created_even_for_empty_batch(tmp_path):
    result = generate_and_save_images([], _config(tmp_path), client=FakeImageClient([]))
    assert (tmp_path / "images").is_dir()
    assert result.total == 0


def test_saved_file_format_matches_its_extension(tmp_path):
    client = FakeImageClient([image_response(encode_image()), image_response(encode_image())])
    entries = [PromptEntry(prompt="a", filename="a.jpg"), PromptEntry(prompt="b")]

    result = generate_and_save_images(
        entries, _config(tmp_path, extension=".png"), client=client, clock=lambda: 3
    )

    assert [p.name for p in result.saved] == ["a.png", "image_2_3.png"]
    for path in result.saved:
        with Image.open(path) as img:
            assert img.format == "PNG"
