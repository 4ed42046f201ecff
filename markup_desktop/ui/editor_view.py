"""Source view: a Tk text widget editing the document markup.

:class:`SourceEditorView` satisfies
:class:`markup_desktop.core.interfaces.EditorCapability` by delegating to a
:class:`HtmlDocumentEditor` model and keeping the widget in step with it.
Formatting commands act on the markup around the selection.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import simpledialog, ttk
from typing import Any, Dict, List, Optional

from markup_desktop.core.editor import HtmlDocumentEditor
from markup_desktop.core.interfaces import ChangeListener
from markup_desktop.core.tables import TABLE_COMMANDS

logger = logging.getLogger(__name__)

__all__ = ["SourceEditorView", "INLINE_TAGS", "BLOCK_TAGS"]

INLINE_TAGS: Dict[str, str] = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "strikethrough": "s",
    "code": "code",
    "subscript": "sub",
    "superscript": "sup",
}

BLOCK_TAGS = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "pre")

LIST_TAGS = {"bullet": "ul", "number": "ol"}


class SourceEditorView(ttk.Frame):
    """Text widget plus scrollbar bound to an editor model."""

    def __init__(self, master: tk.Misc, model: Optional[HtmlDocumentEditor] = None, **kwargs: Any) -> None:
        super().__init__(master, **kwargs)
        self.model = model if model is not None else HtmlDocumentEditor()

        self.text = tk.Text(self, wrap="word", undo=True, font=("Courier", 11))
        scrollbar = ttk.Scrollbar(self, orient="vertical", command=self.text.yview)
        self.text.configure(yscrollcommand=scrollbar.set)
        self.text.grid(row=0, column=0, sticky="nsew")
        scrollbar.grid(row=0, column=1, sticky="ns")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.text.bind("<<Modified>>", self._on_modified, add=True)
        self._refresh()

    # ------------------------------------------------------------------
    # Widget <-> model synchronisation
    # ------------------------------------------------------------------
    def _widget_text(self) -> str:
        return self.text.get("1.0", "end-1c")

    def _refresh(self) -> None:
        """Show the model's markup, keeping the cursor where it was."""
        content = self.model.get_html()
        if self._widget_text() == content:
            return
        cursor = self.text.index("insert")
        self.text.delete("1.0", "end")
        self.text.insert("1.0", content)
        self.text.mark_set("insert", cursor)
        self.text.edit_modified(False)

    def _pull(self) -> None:
        content = self._widget_text()
        if content != self.model.get_html():
            self.model.apply_input(content)

    def _on_modified(self, _event: Any = None) -> None:
        if not self.text.edit_modified():
            return
        self._pull()
        self.text.edit_modified(False)

    # ------------------------------------------------------------------
    # EditorCapability
    # ------------------------------------------------------------------
    def get_html(self) -> str:
        self._pull()
        return self.model.get_html()

    def set_html(self, content: str, use_base: bool = False, base: Optional[str] = None) -> None:
        self.model.set_html(content, use_base=use_base, base=base)
        self._refresh()
        self.text.edit_reset()

    def empty_document(self) -> None:
        self.model.empty_document()
        self._refresh()
        self.text.edit_reset()

    def is_changed(self) -> bool:
        self._pull()
        return self.model.is_changed()

    def mark_clean(self) -> None:
        self.model.mark_clean()

    def get_data_images(self) -> List[str]:
        self._pull()
        return self.model.get_data_images()

    def saved_data_image(self, old_reference: str, new_file_name: str) -> None:
        self.model.saved_data_image(old_reference, new_file_name)
        self._refresh()

    def insert_image(self, src: str, alt: Optional[str] = None) -> None:
        self._pull()
        self.model.insert_image(src, alt=alt)
        self._refresh()
        self.text.see("end")

    def markup_editor_config(self) -> Dict[str, Any]:
        return self.model.markup_editor_config()

    def add_change_listener(self, listener: ChangeListener) -> None:
        self.model.add_change_listener(listener)

    def add_image_request_listener(self, listener) -> None:
        self.model.add_image_request_listener(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def perform(self, command_id: str, **params: Any) -> None:
        self._pull()
        if command_id in INLINE_TAGS:
            self._wrap_selection(f"<{INLINE_TAGS[command_id]}>", f"</{INLINE_TAGS[command_id]}>")
        elif command_id in BLOCK_TAGS:
            self._wrap_line(command_id)
        elif command_id in LIST_TAGS:
            tag = LIST_TAGS[command_id]
            self._wrap_selection(f"<{tag}><li>", f"</li></{tag}>")
        elif command_id == "indent":
            self._wrap_selection("<blockquote>", "</blockquote>")
        elif command_id == "outdent":
            self._unwrap_selection("<blockquote>", "</blockquote>")
        elif command_id == "link":
            self._wrap_selection('<a href="">', "</a>")
        elif command_id == "image":
            self.model.request_image()
            return
        elif command_id == "insertTable" or command_id in TABLE_COMMANDS:
            self.model.cursor = len(self.text.get("1.0", "insert"))
            self.model.perform(command_id, **params)
            self._refresh()
            return
        elif command_id == "search":
            self._search()
            return
        else:
            self.model.perform(command_id, **params)
            return
        self._pull()

    def _selection(self):
        try:
            return self.text.index("sel.first"), self.text.index("sel.last")
        except tk.TclError:
            cursor = self.text.index("insert")
            return cursor, cursor

    def _wrap_selection(self, opening: str, closing: str) -> None:
        first, last = self._selection()
        self.text.insert(last, closing)
        self.text.insert(first, opening)

    def _unwrap_selection(self, opening: str, closing: str) -> None:
        first, last = self._selection()
        selected = self.text.get(first, last)
        if selected.startswith(opening) and selected.endswith(closing):
            inner = selected[len(opening):len(selected) - len(closing)]
            self.text.delete(first, last)
            self.text.insert(first, inner)

    def _wrap_line(self, tag: str) -> None:
        start, end = "insert linestart", "insert lineend"
        line = self.text.get(start, end)
        stripped = line.strip()
        for existing in BLOCK_TAGS:
            if stripped.startswith(f"<{existing}>") and stripped.endswith(f"</{existing}>"):
                stripped = stripped[len(existing) + 2:len(stripped) - len(existing) - 3]
                break
        self.text.delete(start, end)
        self.text.insert(start, f"<{tag}>{stripped}</{tag}>")

    def _search(self) -> None:
        needle = simpledialog.askstring("Search", "Find:", parent=self)
        if not needle:
            return
        found = self.text.search(needle, "insert +1c", stopindex="end") or self.text.search(needle, "1.0", stopindex="end")
        if not found:
            logger.info("Search: '%s' not found", needle)
            return
        end = f"{found}+{len(needle)}c"
        self.text.tag_remove("sel", "1.0", "end")
        self.text.tag_add("sel", found, end)
        self.text.mark_set("insert", end)
        self.text.see(found)
