"""Unsaved-changes confirmation shared by open, new-document and quit flows."""

import logging

from markup_desktop.core.interfaces import DialogProvider, EditorCapability
from markup_desktop.core.session import DocumentSession

logger = logging.getLogger(__name__)

__all__ = ["ConfirmationPolicy"]


class ConfirmationPolicy:
    """Decide whether the current document may be discarded."""

    def __init__(self, editor: EditorCapability, dialogs: DialogProvider) -> None:
        self.editor = editor
        self.dialogs = dialogs

    def confirm_discard(self) -> bool:
        """Return True when it is fine to drop the current content.

        Auto-approves without prompting when the editor reports no changes.
        """
        if not self.editor.is_changed():
            return True
        proceed = bool(self.dialogs.ask_discard_changes())
        logger.info("Discard unsaved changes: %s", "yes" if proceed else "no")
        return proceed

    def confirm_quit(self, session: DocumentSession) -> bool:
        """Return True when the window may close.

        A quit already in progress is approved straight away so the handler
        cannot prompt twice; the guard is released only if the user cancels.
        """
        state = session.state
        if state.quit_in_progress:
            return True
        state.quit_in_progress = True
        if self.confirm_discard():
            return True
        state.quit_in_progress = False
        return False
