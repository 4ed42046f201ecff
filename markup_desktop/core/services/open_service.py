from __future__ import annotations

"""Open and new-document flows.

Reads a document from disk, hands it to the editor together with the base
directory used to resolve its sibling resources, and keeps the
:class:`DocumentSession` in step.
"""

import logging
from pathlib import Path

from markup_desktop.core.exceptions import DocumentIOError, UserCancelled
from markup_desktop.core.interfaces import DialogProvider, EditorCapability
from markup_desktop.core.models import OpenResult, OperationStatus
from markup_desktop.core.services.confirmation_service import ConfirmationPolicy
from markup_desktop.core.session import DocumentSession, base_directory_for

logger = logging.getLogger(__name__)

__all__ = ["OpenCoordinator"]


class OpenCoordinator:
    """Business-logic façade for loading documents, with zero Tk dependencies."""

    def __init__(self, editor: EditorCapability, dialogs: DialogProvider,
                 confirmation: ConfirmationPolicy | None = None) -> None:
        self.editor = editor
        self.dialogs = dialogs
        self.confirmation = confirmation or ConfirmationPolicy(editor, dialogs)

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def open(self, session: DocumentSession) -> OpenResult:
        """Prompt for a file and load it into the editor.

        Returns:
            OpenResult with ``content`` and ``base_directory`` on success;
            ``CANCELLED`` when the user keeps their changes or dismisses the
            file dialog; ``FAILED`` when the file cannot be read.
        """
        try:
            if not self.confirmation.confirm_discard():
                raise UserCancelled("Open")
            chosen = self.dialogs.ask_open_path()
            if not chosen:
                raise UserCancelled("Open")
        except UserCancelled as exc:
            logger.debug("%s", exc)
            return OpenResult(status=OperationStatus.CANCELLED)

        return self.open_path(session, Path(chosen))

    def open_path(self, session: DocumentSession, path: Path | str) -> OpenResult:
        """Load *path* without prompting (command line, recent files)."""
        path = Path(path)
        logger.info("Open: %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            error = DocumentIOError("Could not read document", path, exc)
            logger.error("Open failed: %s", error)
            return OpenResult(status=OperationStatus.FAILED, path=path, error=error)

        base = base_directory_for(path)
        self.editor.set_html(content, use_base=True, base=base)
        self.editor.mark_clean()
        session.mark_loaded(path)
        return OpenResult(status=OperationStatus.SUCCESS, path=path,
                          content=content, base_directory=base)

    def new_document(self, session: DocumentSession) -> OpenResult:
        """Replace the document with an empty one, after confirmation."""
        if not self.confirmation.confirm_discard():
            logger.debug("New document cancelled")
            return OpenResult(status=OperationStatus.CANCELLED)
        self.editor.empty_document()
        self.editor.mark_clean()
        session.reset()
        logger.info("New document")
        return OpenResult(status=OperationStatus.SUCCESS, content=self.editor.get_html())
