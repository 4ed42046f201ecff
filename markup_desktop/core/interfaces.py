from __future__ import annotations

"""Interface definitions for the collaborators the core drives.

The editing surface and the dialog layer live outside the core. These
protocols form the contract between them and the coordinators in
:mod:`markup_desktop.core.services`.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

__all__ = ["EditorCapability", "DialogProvider", "ChangeListener", "CommandInvoker"]

# Called with no arguments whenever the user changes the document
ChangeListener = Callable[[], None]

# Host callback used by menu actions: invoker(command_id, **params)
CommandInvoker = Callable[..., Any]


@runtime_checkable
class EditorCapability(Protocol):
    """Protocol for the rich-text editing surface.

    Calls are plain method calls with Python arguments; no content escaping
    is needed on either side.
    """

    def get_html(self) -> str:
        """Return the serialized document markup."""
        ...

    def set_html(self, content: str, use_base: bool = False, base: Optional[str] = None) -> None:
        """Replace the document.

        Args:
            content: New markup
            use_base: When True, *base* becomes the directory relative
                      references are resolved against
            base: Directory path ending with a separator
        """
        ...

    def empty_document(self) -> None:
        ...

    def is_changed(self) -> bool:
        """Return True when there are edits not yet persisted."""
        ...

    def mark_clean(self) -> None:
        """Forget pending changes after a load or a successful save."""
        ...

    def get_data_images(self) -> List[str]:
        """Return embedded image references in document order."""
        ...

    def saved_data_image(self, old_reference: str, new_file_name: str) -> None:
        """Point every element whose source starts with *old_reference* at *new_file_name*."""
        ...

    def insert_image(self, src: str, alt: Optional[str] = None) -> None:
        ...

    def perform(self, command_id: str, **params: Any) -> None:
        """Run a formatting/style/list/table/search command."""
        ...

    def markup_editor_config(self) -> Dict[str, Any]:
        """Return the toolbar/keymap configuration read at editor-ready time."""
        ...

    def add_change_listener(self, listener: ChangeListener) -> None:
        ...


@runtime_checkable
class DialogProvider(Protocol):
    """Protocol for user prompts.

    Path prompts return ``None`` when the user cancels.
    """

    def ask_open_path(self) -> Optional[Path]:
        ...

    def ask_save_path(self, initial: Optional[Path] = None) -> Optional[Path]:
        ...

    def ask_image_path(self) -> Optional[Path]:
        ...

    def ask_discard_changes(self) -> bool:
        """Ask whether unsaved changes may be discarded; True means proceed."""
        ...
