"""Shared fixtures for the MarkupDesktop test-suite.

Provides a temporary directory, a headless editor, scripted dialogs and a
fresh document session. Configuration is isolated per test: the user config
directory points into a temp dir and the :class:`ConfigManager` singleton is
reset around every test.
"""

import pytest
import tempfile
import shutil
import logging
from pathlib import Path
from typing import List, Optional

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from markup_desktop.config import ConfigManager
from markup_desktop.core.editor import HtmlDocumentEditor
from markup_desktop.core.session import DocumentSession

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c636000000002000154a24f5d0000000049454e44ae426082"
)
PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4nGNgAAAAAgABVKJPXQAAAABJRU5ErkJggg=="


class FakeDialogs:
    """Scripted :class:`DialogProvider`; records every prompt it answers."""

    def __init__(self, open_path: Optional[Path] = None, save_path: Optional[Path] = None,
                 image_path: Optional[Path] = None, discard: bool = True):
        self.open_path = open_path
        self.save_path = save_path
        self.image_path = image_path
        self.discard = discard
        self.calls: List[str] = []
        self.save_initial: List[Optional[Path]] = []

    def ask_open_path(self):
        self.calls.append("open")
        return self.open_path

    def ask_save_path(self, initial=None):
        self.calls.append("save")
        self.save_initial.append(initial)
        return self.save_path

    def ask_image_path(self):
        self.calls.append("image")
        return self.image_path

    def ask_discard_changes(self):
        self.calls.append("discard")
        return self.discard


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user configuration at a temp dir and drop the cached manager."""
    monkeypatch.setenv("MARKUP_DESKTOP_CONFIG_DIR", str(tmp_path / "user_config"))
    ConfigManager.reset()
    yield
    ConfigManager.reset()


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def editor():
    return HtmlDocumentEditor()


@pytest.fixture
def dialogs():
    return FakeDialogs()


@pytest.fixture
def session():
    return DocumentSession()


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def png_data_url():
    return PNG_DATA_URL
