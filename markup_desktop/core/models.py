from __future__ import annotations

"""Shared data structures used across the MarkupDesktop core.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

__all__ = [
    "DecodedImage",
    "ExternalizedImageFile",
    "OperationStatus",
    "SaveResult",
    "OpenResult",
    "InsertResult",
    "CommandEntry",
    "Submenu",
    "Separator",
    "MenuGroup",
    "MenuEntry",
]


@dataclass(frozen=True)
class DecodedImage:
    """Raw bytes of an embedded image plus the extension derived from it.

    Attributes
    ----------
    payload
        Decoded bytes, byte-identical to what the reference encoded.
    extension
        The media subtype taken verbatim (``png``, ``jpeg``, ``svg+xml``).
    media_type
        The full ``type/subtype`` string.
    """

    payload: bytes
    extension: str
    media_type: str


@dataclass(frozen=True)
class ExternalizedImageFile:
    """A file written during save from an embedded image."""

    file_name: str
    directory: Path

    @property
    def path(self) -> Path:
        return self.directory / self.file_name


class OperationStatus(Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"
    NO_PATH = "no_path"


@dataclass
class SaveResult:
    """Outcome of a save or save-as.

    ``skipped`` lists references left embedded with the reason; ``errors``
    holds every exception met, including per-image failures that did not
    stop the document write.
    """

    status: OperationStatus
    path: Optional[Path] = None
    externalized: List[ExternalizedImageFile] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCESS


@dataclass
class OpenResult:
    """Outcome of opening a document: content and base directory on success."""

    status: OperationStatus
    path: Optional[Path] = None
    content: Optional[str] = None
    base_directory: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCESS


@dataclass
class InsertResult:
    status: OperationStatus
    media_type: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCESS


# ---------------------------------------------------------------------------
# Menu model
# ---------------------------------------------------------------------------


@dataclass
class CommandEntry:
    """A single invocable menu item."""

    label: str
    action: Callable[[], Any]
    accelerator: Optional[str] = None
    visible: bool = True
    command_id: Optional[str] = None


@dataclass
class Submenu:
    """A cascading menu holding further entries."""

    label: str
    entries: List["MenuEntry"] = field(default_factory=list)
    command_id: Optional[str] = None


@dataclass(frozen=True)
class Separator:
    pass


MenuEntry = Union[CommandEntry, Submenu, Separator]


@dataclass
class MenuGroup:
    """Ordered, non-empty run of entries shown between separators."""

    name: str
    entries: List[MenuEntry] = field(default_factory=list)

    def labels(self) -> List[str]:
        return [e.label for e in self.entries if not isinstance(e, Separator)]

    def find(self, label: str) -> Optional[MenuEntry]:
        for entry in self.entries:
            if not isinstance(entry, Separator) and entry.label == label:
                return entry
        return None

    def as_dict(self) -> Dict[str, Any]:
        """Plain-data view, handy for logging and assertions."""
        return {"name": self.name, "entries": [_entry_dict(e) for e in self.entries]}


def _entry_dict(entry: MenuEntry) -> Dict[str, Any]:
    if isinstance(entry, Separator):
        return {"type": "separator"}
    if isinstance(entry, Submenu):
        return {"label": entry.label, "submenu": [_entry_dict(e) for e in entry.entries]}
    return {"label": entry.label, "accelerator": entry.accelerator}
