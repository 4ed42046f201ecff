"""Top-level package for the document-persistence portion of MarkupDesktop.

This package hosts the GUI-agnostic save/open pipeline and the menu builder.
Front-ends (the Tk shell in :mod:`markup_desktop.app`, tests, scripts) should
depend on the public API exposed here rather than importing internal modules
directly.
"""

from .core.session import DocumentSession, SessionState  # re-export for convenience
from .core.editor import HtmlDocumentEditor

__version__ = "0.1.0"

__all__: list[str] = [
    "DocumentSession",
    "SessionState",
    "HtmlDocumentEditor",
]
