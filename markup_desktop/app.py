# -*- coding: utf-8 -*-
"""Tk-based GUI front-end for MarkupDesktop.

Main application widget hosting the editor view and the menubar.
Exposes the :class:`MarkupDesktop` widget, which is instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import tkinter as tk

from markup_desktop.config import ConfigManager
from markup_desktop.core.editor import HtmlDocumentEditor
from markup_desktop.core.menu import MenuBuilder, MenuConfiguration, build_file_menu
from markup_desktop.core.models import OpenResult, OperationStatus, SaveResult
from markup_desktop.core.services import (
    ConfirmationPolicy,
    ImageInsertService,
    OpenCoordinator,
    SaveCoordinator,
)
from markup_desktop.core.session import DocumentSession
from markup_desktop.ui.dialogs import TkDialogs
from markup_desktop.ui.editor_view import SourceEditorView
from markup_desktop.ui.menu_bar import MenuBar

logger = logging.getLogger(__name__)

__all__ = ["MarkupDesktop"]


class MarkupDesktop:
    """One document window: session, editor view, coordinators and menus."""

    def __init__(self, root: tk.Tk, app_config: Optional[Dict[str, Any]] = None):
        self.root = root
        config = ConfigManager()
        self.app_config = app_config if app_config is not None else config.get_app_config()
        self._title = (self.app_config.get("window", {}) or {}).get("title", "MarkupDesktop")

        self.session = DocumentSession()
        self.dialogs = TkDialogs(root, self.app_config)

        model = HtmlDocumentEditor(config=config.get_markup_editor_config())
        self.editor = SourceEditorView(root, model)
        self.editor.pack(fill="both", expand=True)

        # --- Coordinators ------------------------------------------------
        self.confirmation = ConfirmationPolicy(self.editor, self.dialogs)
        self.saver = SaveCoordinator(self.editor, self.dialogs)
        self.opener = OpenCoordinator(self.editor, self.dialogs, self.confirmation)
        self.images = ImageInsertService(self.editor, self.dialogs)

        self.editor.add_change_listener(self.on_document_changed)
        self.editor.add_image_request_listener(self.insert_image)

        # --- Menus -------------------------------------------------------
        self.menu_bar = MenuBar(root, key_targets=[self.editor.text])
        self.menu_bar.set_cascade("File", [build_file_menu(
            open_document=self.open_document,
            new_document=self.new_document,
            save_document=self.save_document,
            save_document_as=self.save_document_as,
        )])
        self.on_editor_ready()

        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self._update_title()

    # ------------------------------------------------------------------
    # Editor events
    # ------------------------------------------------------------------

    def on_editor_ready(self) -> None:
        """Build the Format menu from the editor's configuration."""
        menu_config = MenuConfiguration.from_markup_config(self.editor.markup_editor_config())
        logger.debug("Menu configuration: %s", menu_config.as_dict())
        groups = MenuBuilder(self.invoke_command).build(menu_config)
        if groups:
            logger.debug("Format menu: %s", [g.as_dict() for g in groups])
            self.menu_bar.set_cascade("Format", groups)
        else:
            logger.info("No editor commands configured; Format menu omitted")

    def invoke_command(self, command_id: str, **params: Any) -> None:
        self.editor.perform(command_id, **params)

    def on_document_changed(self) -> None:
        self.session.mark_changed()
        self._update_title()

    def _update_title(self) -> None:
        marker = "*" if self.session.dirty else ""
        self.root.title(f"{marker}{self.session.display_name} - {self._title}")

    # ------------------------------------------------------------------
    # File commands
    # ------------------------------------------------------------------

    def open_document(self) -> OpenResult:
        result = self.opener.open(self.session)
        self._report_open(result)
        return result

    def open_path(self, path: Path | str) -> OpenResult:
        result = self.opener.open_path(self.session, path)
        self._report_open(result)
        return result

    def new_document(self) -> OpenResult:
        result = self.opener.new_document(self.session)
        self._update_title()
        return result

    def save_document(self) -> SaveResult:
        result = self.saver.save(self.session)
        if result.status is OperationStatus.NO_PATH:
            return self.save_document_as()
        self._report_save(result)
        return result

    def save_document_as(self) -> SaveResult:
        result = self.saver.save_as(self.session)
        self._report_save(result)
        return result

    def insert_image(self) -> None:
        result = self.images.select_and_insert()
        if result.status is OperationStatus.FAILED:
            self.dialogs.show_error("Insert image", str(result.error))

    def _report_open(self, result: OpenResult) -> None:
        if result.status is OperationStatus.FAILED:
            self.dialogs.show_error("Open error", str(result.error))
        self._update_title()

    def _report_save(self, result: SaveResult) -> None:
        if result.status is OperationStatus.FAILED:
            self.dialogs.show_error("Save error", "\n".join(str(e) for e in result.errors))
        elif result.ok and result.errors:
            self.dialogs.show_error(
                "Some images were not saved",
                "The document was saved, but these images stay embedded:\n\n"
                + "\n".join(str(e) for e in result.errors),
            )
        self._update_title()

    # ------------------------------------------------------------------
    # Exit handling
    # ------------------------------------------------------------------

    def on_close(self):
        if self.confirmation.confirm_quit(self.session):
            logger.info("Closing %s", self.session.display_name)
            self.root.destroy()
