from __future__ import annotations

"""In-memory HTML editor implementing :class:`EditorCapability`.

Holds the document markup as a string and only re-serializes it when an
operation actually rewrites elements, so loading and saving a document
without embedded images is byte-preserving. Used headless (tests, scripts)
and as the model behind the Tk source view.
"""

import copy
import html as _html
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from markup_desktop.core.image_codec import is_embedded
from markup_desktop.core.interfaces import ChangeListener
from markup_desktop.core.tables import TABLE_COMMANDS, edit_table, table_markup
from markup_desktop.core.utils import iter_resource_attributes, parse_markup, serialize_markup

logger = logging.getLogger(__name__)

__all__ = ["HtmlDocumentEditor", "EMPTY_DOCUMENT"]

EMPTY_DOCUMENT = "<p></p>"


class HtmlDocumentEditor:
    """Headless editor model.

    Parameters
    ----------
    html
        Initial markup.
    config
        ``markupEditorConfig`` mapping handed out by
        :meth:`markup_editor_config`.
    """

    def __init__(self, html: str = EMPTY_DOCUMENT, config: Optional[Dict[str, Any]] = None) -> None:
        self._html = html
        self._base: Optional[str] = None
        self._changed = False
        self._config: Dict[str, Any] = dict(config or {})
        self._change_listeners: List[ChangeListener] = []
        self._image_request_listeners: List[Callable[[], None]] = []
        self.performed: List[Tuple[str, Dict[str, Any]]] = []
        # Caret as a character offset into the markup; None is the end
        self.cursor: Optional[int] = None

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------
    @property
    def base(self) -> Optional[str]:
        return self._base

    def get_html(self) -> str:
        return self._html

    def set_html(self, content: str, use_base: bool = False, base: Optional[str] = None) -> None:
        if use_base:
            self._base = base
        self._html = content

    def empty_document(self) -> None:
        self._html = EMPTY_DOCUMENT
        self._base = None

    def apply_input(self, content: str) -> None:
        """Replace the content as the result of user input."""
        self._html = content
        self._notify_changed()

    # ------------------------------------------------------------------
    # Change tracking
    # ------------------------------------------------------------------
    def is_changed(self) -> bool:
        return self._changed

    def mark_clean(self) -> None:
        self._changed = False

    def add_change_listener(self, listener: ChangeListener) -> None:
        self._change_listeners.append(listener)

    def _notify_changed(self) -> None:
        self._changed = True
        for listener in list(self._change_listeners):
            listener()

    # ------------------------------------------------------------------
    # Embedded images
    # ------------------------------------------------------------------
    def get_data_images(self) -> List[str]:
        root, _ = parse_markup(self._html)
        seen: List[str] = []
        for el, attr, value in iter_resource_attributes(root):
            if attr == "src" and is_embedded(value) and value not in seen:
                seen.append(value)
        return seen

    def saved_data_image(self, old_reference: str, new_file_name: str) -> None:
        root, is_document = parse_markup(self._html)
        count = 0
        for el, attr, value in iter_resource_attributes(root):
            if attr == "src" and value.startswith(old_reference):
                el.set(attr, new_file_name)
                count += 1
        if count:
            self._html = serialize_markup(root, is_document)
        logger.debug("Rewrote %d embedded reference(s) to %s", count, new_file_name)

    def insert_image(self, src: str, alt: Optional[str] = None) -> None:
        alt_attr = f' alt="{_html.escape(alt)}"' if alt else ""
        self._html = f'{self._html}<p><img src="{_html.escape(src)}"{alt_attr}></p>'
        self._notify_changed()

    def add_image_request_listener(self, listener: Callable[[], None]) -> None:
        self._image_request_listeners.append(listener)

    def request_image(self) -> None:
        """Signal the host that the user asked to insert an image."""
        for listener in list(self._image_request_listeners):
            listener()

    # ------------------------------------------------------------------
    # Commands and configuration
    # ------------------------------------------------------------------
    def perform(self, command_id: str, **params: Any) -> None:
        """Run a command at :attr:`cursor`.

        Table insertion and table editing rewrite the markup. Every command
        is recorded in :attr:`performed`; the document is only marked
        changed when its markup actually differs afterwards.
        """
        logger.debug("Command %s %s", command_id, params or "")
        self.performed.append((command_id, dict(params)))
        caret = len(self._html) if self.cursor is None else min(self.cursor, len(self._html))

        updated: Optional[str] = None
        if command_id == "insertTable":
            table = table_markup(int(params.get("rows", 1)), int(params.get("cols", 1)))
            updated = self._html[:caret] + table + self._html[caret:]
        elif command_id in TABLE_COMMANDS:
            updated = edit_table(self._html, caret, command_id, **params)

        if updated is not None and updated != self._html:
            self._html = updated
            self._notify_changed()

    def markup_editor_config(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)
