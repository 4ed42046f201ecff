from __future__ import annotations

"""Per-window document session state.

One :class:`DocumentSession` exists per editor window. It owns the
:class:`SessionState` (file path and quit guard) and the dirty flag, and is
passed explicitly into every coordinator; nothing here lives at module scope.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

__all__ = ["SessionState", "DocumentSession"]


@dataclass
class SessionState:
    """Window-level state.

    Attributes
    ----------
    file_path
        Path of the document on disk, ``None`` for an unsaved document.
    quit_in_progress
        Set while a quit confirmation is pending so the quit handler does not
        re-enter itself.
    """

    file_path: Optional[Path] = None
    quit_in_progress: bool = False


class DocumentSession:
    """Tracks the associated file and the dirty flag for one open document."""

    def __init__(self, state: Optional[SessionState] = None) -> None:
        self.state = state or SessionState()
        self._dirty = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def file_path(self) -> Optional[Path]:
        return self.state.file_path

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def base_directory(self) -> Optional[str]:
        """Directory of the document with a trailing separator, if saved."""
        if self.state.file_path is None:
            return None
        return base_directory_for(self.state.file_path)

    @property
    def display_name(self) -> str:
        if self.state.file_path is None:
            return "Untitled"
        return self.state.file_path.name

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def mark_changed(self) -> None:
        """Record a content-changing input from the editor."""
        if not self._dirty:
            logger.debug("Session dirty: %s", self.display_name)
        self._dirty = True

    def mark_loaded(self, path: Path | str) -> None:
        self.state.file_path = Path(path)
        self._dirty = False
        logger.debug("Session loaded: %s", self.state.file_path)

    def mark_saved(self, path: Path | str) -> None:
        self.state.file_path = Path(path)
        self._dirty = False
        logger.debug("Session saved: %s", self.state.file_path)

    def retarget(self, path: Path | str) -> None:
        """Point the session at a new path without touching the dirty flag."""
        self.state.file_path = Path(path)

    def reset(self) -> None:
        """Forget the file path for a new, empty document."""
        self.state.file_path = None
        self._dirty = False


def base_directory_for(path: Path | str) -> str:
    """Return the containing directory of *path* with a trailing separator."""
    parent = str(Path(path).resolve().parent)
    if not parent.endswith(os.sep):
        parent += os.sep
    return parent
