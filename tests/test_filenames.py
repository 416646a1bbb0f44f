from agents.image_generator.filenames import ensure_extension, resolve_filename


def test_template_gets_run_prefix_and_jpg_extension():
    assert resolve_filename(1, "ruler.png", 123, run_id="run1") == "run1_ruler.jpg"


def test_default_name_without_run_id():
    assert resolve_filename(1, None, 1700000000000) == "image_1_1700000000000.jpg"


def test_default_name_with_run_id():
    assert resolve_filename(3, None, 42, run_id="run1") == "image_3_run1_42.jpg"


def test_every_timestamp_placeholder_is_replaced():
    name = resolve_filename(1, "{timestamp}/a_{timestamp}_b_{timestamp}", 99)
    assert name == "99/a_99_b_99.jpg"
    assert "{timestamp}" not in resolve_filename(1, "x_{timestamp}.png", 5)


def test_existing_prefix_is_not_doubled():
    assert resolve_filename(1, "run1_ruler.jpg", 1, run_id="run1") == "run1_ruler.jpg"


def test_extension_is_case_insensitive_and_kept():
    assert resolve_filename(1, "photo.JPG", 1) == "photo.JPG"


def test_name_without_extension():
    assert resolve_filename(1, "cover", 1) == "cover.jpg"


def test_ensure_extension_is_idempotent():
    for name in ["a.png", "a", "a.b.webp", "a.jpg", "a.tar.gz"]:
        once = ensure_extension(name)
        assert ensure_extension(once) == once
        assert once.endswith(".jpg")
        assert not once.endswith(".jpg.jpg")


def test_custom_extension():
    assert resolve_filename(2, "a.jpg", 1, extension=".png") == "a.png"
