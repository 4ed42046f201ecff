import re

import pytest

from markup_desktop.core.exceptions import DocumentIOError
from markup_desktop.core.externalizer import ImageExternalizer, generate_image_name
from markup_desktop.core.models import DecodedImage


def _decoded(payload=b"\x89PNG", ext="png"):
    return DecodedImage(payload=payload, extension=ext, media_type=f"image/{ext}")


def test_generated_names_are_unique_and_keep_extension():
    names = {generate_image_name("png") for _ in range(50)}
    assert len(names) == 50
    assert all(re.fullmatch(r"[0-9a-f]{32}\.png", n) for n in names)


def test_externalize_writes_payload_next_to_document(temp_dir):
    name = ImageExternalizer().externalize(_decoded(b"abc"), temp_dir)
    assert (temp_dir / name).read_bytes() == b"abc"
    assert name.endswith(".png")


def test_externalize_file_reports_location(temp_dir):
    written = ImageExternalizer().externalize_file(_decoded(ext="jpeg"), temp_dir)
    assert written.directory == temp_dir
    assert written.path.exists()
    assert written.file_name.endswith(".jpeg")


def test_write_failure_becomes_document_io_error(temp_dir):
    def failing_writer(path, data):
        raise PermissionError("read-only volume")

    with pytest.raises(DocumentIOError) as info:
        ImageExternalizer(writer=failing_writer).externalize(_decoded(), temp_dir)
    assert isinstance(info.value.cause, PermissionError)
    assert info.value.path.parent == temp_dir
