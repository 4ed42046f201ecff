from __future__ import annotations

"""Document pipeline exception classes.

Every failure the save/open pipeline can meet has a class here. Coordinators
catch these and report them through result objects (see
:mod:`markup_desktop.core.models`) so the host decides what the user sees.
"""

from pathlib import Path
from typing import Optional


class MarkupDesktopError(Exception):
    """Base exception for all document pipeline errors.

    Carries the file path involved (when there is one) and the underlying
    cause so log records keep the full context.
    """

    def __init__(self, message: str, path: Optional[Path | str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.cause = cause

    def __str__(self) -> str:
        if self.path is not None:
            return f"[{self.path}] {super().__str__()}"
        return super().__str__()


class UserCancelled(MarkupDesktopError):
    """Raised when the user dismisses a dialog.

    Not an error from the user's point of view; callers treat it silently.
    """

    def __init__(self, operation: str = "operation") -> None:
        super().__init__(f"{operation} cancelled by user")
        self.operation = operation


class DocumentIOError(MarkupDesktopError):
    """Raised when reading or writing a document or image file fails."""
    pass


class UnsupportedMediaType(MarkupDesktopError):
    """Raised when a media type is neither ``image/*`` nor ``video/*``.

    Also used when a file chosen for insertion cannot be classified.
    """

    def __init__(self, media_type: Optional[str], path: Optional[Path | str] = None) -> None:
        self.media_type = media_type
        if media_type:
            message = f"Unsupported media type '{media_type}'"
        else:
            message = "Media type could not be determined"
        super().__init__(message, path)


class DecodeError(MarkupDesktopError):
    """Raised when an embedded reference string is malformed."""
    pass


class NoOpenPath(MarkupDesktopError):
    """Raised when saving a session that has no associated file path."""

    def __init__(self) -> None:
        super().__init__("Document has no file path; use Save As")


__all__ = [
    "MarkupDesktopError",
    "UserCancelled",
    "DocumentIOError",
    "UnsupportedMediaType",
    "DecodeError",
    "NoOpenPath",
]
