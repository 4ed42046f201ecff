"""Tk implementation of :class:`markup_desktop.core.interfaces.DialogProvider`.

Thin wrappers over :mod:`tkinter.filedialog` and :mod:`tkinter.messagebox`.
Empty results (the user pressed Cancel) come back as ``None``.
"""

from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Any, Dict, Optional, Sequence, Tuple

from markup_desktop.config import ConfigManager

__all__ = ["TkDialogs"]

_DEFAULT_DOCUMENT_TYPES = (("HTML", "*.html *.htm"), ("All files", "*.*"))
_DEFAULT_IMAGE_TYPES = (("Images", "*.png *.jpg *.jpeg *.gif"), ("All files", "*.*"))


def _filetypes(section: Dict[str, Any], fallback: Sequence[Tuple[str, str]]) -> Tuple[Tuple[str, str], ...]:
    entries = section.get("filetypes") if isinstance(section, dict) else None
    if not entries:
        return tuple(fallback)
    return tuple((str(label), str(pattern)) for label, pattern in entries)


class TkDialogs:
    """File and confirmation prompts parented to *master*."""

    def __init__(self, master: Optional[tk.Misc] = None, app_config: Optional[Dict[str, Any]] = None) -> None:
        self._master = master
        config = app_config if app_config is not None else ConfigManager().get_app_config()
        documents = config.get("documents", {}) or {}
        self._document_types = _filetypes(documents, _DEFAULT_DOCUMENT_TYPES)
        self._default_extension = documents.get("default_extension", ".html")
        self._image_types = _filetypes(config.get("images", {}) or {}, _DEFAULT_IMAGE_TYPES)

    def ask_open_path(self) -> Optional[Path]:
        filepath = filedialog.askopenfilename(
            parent=self._master,
            title="Open document",
            filetypes=self._document_types,
        )
        return Path(filepath) if filepath else None

    def ask_save_path(self, initial: Optional[Path] = None) -> Optional[Path]:
        options: Dict[str, Any] = {}
        if initial is not None:
            options["initialdir"] = str(initial.parent)
            options["initialfile"] = initial.name
        filepath = filedialog.asksaveasfilename(
            parent=self._master,
            title="Save document as",
            defaultextension=self._default_extension,
            filetypes=self._document_types,
            **options,
        )
        return Path(filepath) if filepath else None

    def ask_image_path(self) -> Optional[Path]:
        filepath = filedialog.askopenfilename(
            parent=self._master,
            title="Insert image",
            filetypes=self._image_types,
        )
        return Path(filepath) if filepath else None

    def ask_discard_changes(self) -> bool:
        return bool(messagebox.askokcancel(
            "Unsaved changes",
            "The document has unsaved changes. Discard them?",
            icon=messagebox.WARNING,
            parent=self._master,
        ))

    def show_error(self, title: str, message: str) -> None:
        messagebox.showerror(title, message, parent=self._master)
