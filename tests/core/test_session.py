import os
from pathlib import Path

from markup_desktop.core.session import DocumentSession, SessionState, base_directory_for


def test_new_session_is_untitled_and_clean(session):
    assert session.file_path is None
    assert session.base_directory is None
    assert session.display_name == "Untitled"
    assert not session.dirty


def test_base_directory_has_trailing_separator(temp_dir):
    doc = temp_dir / "doc.html"
    base = base_directory_for(doc)
    assert base.endswith(os.sep)
    assert Path(base) == temp_dir.resolve()


def test_dirty_lifecycle(session, temp_dir):
    doc = temp_dir / "a.html"
    session.mark_loaded(doc)
    assert not session.dirty
    session.mark_changed()
    assert session.dirty
    session.mark_saved(doc)
    assert not session.dirty
    assert session.display_name == "a.html"


def test_retarget_keeps_dirty_flag(session, temp_dir):
    session.mark_changed()
    session.retarget(temp_dir / "b.html")
    assert session.dirty
    assert session.file_path == temp_dir / "b.html"


def test_reset_forgets_path(session, temp_dir):
    session.mark_loaded(temp_dir / "a.html")
    session.mark_changed()
    session.reset()
    assert session.file_path is None
    assert not session.dirty


def test_sessions_do_not_share_state(temp_dir):
    first, second = DocumentSession(), DocumentSession()
    first.mark_loaded(temp_dir / "one.html")
    first.state.quit_in_progress = True
    assert second.file_path is None
    assert second.state.quit_in_progress is False


def test_state_can_be_supplied(temp_dir):
    state = SessionState(file_path=temp_dir / "x.html")
    assert DocumentSession(state).file_path == temp_dir / "x.html"
