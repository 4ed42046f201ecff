import pytest
from PIL import Image

from markup_desktop.core.exceptions import DocumentIOError, UnsupportedMediaType
from markup_desktop.core.models import OperationStatus
from markup_desktop.core.services.image_insert_service import ImageInsertService
from markup_desktop.core.services.save_service import SaveCoordinator


@pytest.fixture
def inserter(editor, dialogs):
    return ImageInsertService(editor, dialogs)


@pytest.fixture
def jpeg_file(temp_dir):
    path = temp_dir / "photo.jpg"
    Image.new("RGB", (4, 4), "red").save(path, format="JPEG")
    return path


def test_selected_image_is_embedded(inserter, editor, dialogs, jpeg_file):
    dialogs.image_path = jpeg_file
    result = inserter.select_and_insert()
    assert result.ok
    assert result.media_type == "image/jpeg"
    refs = editor.get_data_images()
    assert len(refs) == 1
    assert refs[0].startswith("data:image/jpeg;base64,")
    assert 'alt="photo"' in editor.get_html()
    assert editor.is_changed()


def test_cancelled_selection(inserter, editor, dialogs):
    dialogs.image_path = None
    assert inserter.select_and_insert().status is OperationStatus.CANCELLED
    assert editor.get_data_images() == []


def test_unreadable_file(inserter, temp_dir):
    result = inserter.insert_file(temp_dir / "nope.png")
    assert result.status is OperationStatus.FAILED
    assert isinstance(result.error, DocumentIOError)


def test_non_image_file_is_rejected(inserter, editor, temp_dir):
    path = temp_dir / "notes.txt"
    path.write_text("hello", encoding="utf-8")
    result = inserter.insert_file(path)
    assert result.status is OperationStatus.FAILED
    assert isinstance(result.error, UnsupportedMediaType)
    assert editor.get_data_images() == []


def test_inserted_image_is_externalized_on_save(inserter, editor, session, temp_dir, jpeg_file):
    inserter.insert_file(jpeg_file)
    session.mark_loaded(temp_dir / "doc.html")
    result = SaveCoordinator(editor).save(session)
    assert result.externalized[0].file_name.endswith(".jpeg")
    assert result.externalized[0].path.read_bytes() == jpeg_file.read_bytes()
