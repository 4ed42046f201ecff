from __future__ import annotations

"""Save pipeline with lazy image externalization.

Entry-point for any front-end that needs to persist the editor's document.
Embedded ``data:`` images are written as sibling files, the editor is told
to point at them, and the final markup is committed to the session's path.
"""

import logging
from pathlib import Path
from typing import Optional

from markup_desktop.core.exceptions import (
    DecodeError,
    DocumentIOError,
    NoOpenPath,
    UnsupportedMediaType,
    UserCancelled,
)
from markup_desktop.core.externalizer import ImageExternalizer
from markup_desktop.core.image_codec import parse_reference
from markup_desktop.core.interfaces import DialogProvider, EditorCapability
from markup_desktop.core.models import OperationStatus, SaveResult
from markup_desktop.core.session import DocumentSession, base_directory_for
from markup_desktop.core.utils import rebase_references, write_text_atomic

logger = logging.getLogger(__name__)

__all__ = ["SaveCoordinator"]


class SaveCoordinator:
    """Orchestrates save and save-as for one editor.

    Parameters
    ----------
    editor
        The editing surface the document lives in.
    dialogs
        Prompt provider; only needed for :meth:`save_as`.
    externalizer
        Writer for embedded images; a default :class:`ImageExternalizer`
        is created when omitted.
    """

    def __init__(self, editor: EditorCapability, dialogs: Optional[DialogProvider] = None,
                 externalizer: Optional[ImageExternalizer] = None) -> None:
        self.editor = editor
        self.dialogs = dialogs
        self.externalizer = externalizer or ImageExternalizer()

    # ---------------------------------------------------------------------
    # PUBLIC API
    # ---------------------------------------------------------------------
    def save(self, session: DocumentSession) -> SaveResult:
        """Save the document to ``session.file_path``.

        Images are externalized one at a time. A failure on one image is
        recorded and the loop moves on; the document itself is still
        written. The dirty flag is cleared only when the document write
        succeeds.

        Returns:
            SaveResult; status ``NO_PATH`` when the session has no path, in
            which case nothing is touched and the host should run save-as.
        """
        path = session.file_path
        if path is None:
            logger.debug("Save requested without a path")
            return SaveResult(status=OperationStatus.NO_PATH, errors=[NoOpenPath()])

        result = SaveResult(status=OperationStatus.SUCCESS, path=path)
        target_dir = Path(session.base_directory or path.parent)

        self._externalize_images(target_dir, result)

        try:
            html = self.editor.get_html()
            write_text_atomic(path, html)
        except OSError as exc:
            error = DocumentIOError("Could not write document", path, exc)
            logger.error("Save failed: %s", error)
            result.errors.append(error)
            result.status = OperationStatus.FAILED
            return result

        self.editor.mark_clean()
        session.mark_saved(path)
        logger.info("Saved %s (%d image(s) externalized, %d skipped, %d error(s))",
                    path, len(result.externalized), len(result.skipped), len(result.errors))
        return result

    def save_as(self, session: DocumentSession) -> SaveResult:
        """Ask for a destination, re-base relative references, then save."""
        try:
            new_path = self._ask_save_path(session)
        except UserCancelled:
            logger.debug("Save As cancelled")
            return SaveResult(status=OperationStatus.CANCELLED)

        new_base = base_directory_for(new_path)
        old_base = session.base_directory
        if old_base != new_base:
            html = self.editor.get_html()
            if old_base is not None:
                html, count = rebase_references(html, old_base, new_base)
                if count:
                    logger.info("Re-based %d relative reference(s) for %s", count, new_path)
            self.editor.set_html(html, use_base=True, base=new_base)

        session.retarget(new_path)
        return self.save(session)

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    def _ask_save_path(self, session: DocumentSession) -> Path:
        if self.dialogs is None:
            raise RuntimeError("Save As needs a dialog provider")
        chosen = self.dialogs.ask_save_path(session.file_path)
        if not chosen:
            raise UserCancelled("Save As")
        return Path(chosen)

    def _externalize_images(self, target_dir: Path, result: SaveResult) -> None:
        references = self.editor.get_data_images()
        if not references:
            return
        logger.debug("Externalizing %d embedded reference(s) into %s", len(references), target_dir)

        handled = set()
        for reference in references:
            if reference in handled:
                continue
            handled.add(reference)
            short = _abbreviate(reference)
            try:
                decoded = parse_reference(reference)
            except (UnsupportedMediaType, DecodeError) as exc:
                logger.warning("Leaving %s embedded: %s", short, exc)
                result.skipped.append((reference, str(exc)))
                continue
            if decoded is None:
                result.skipped.append((reference, "not an embedded reference"))
                continue

            try:
                written = self.externalizer.externalize_file(decoded, target_dir)
            except DocumentIOError as exc:
                logger.error("Could not externalize %s: %s", short, exc)
                result.errors.append(exc)
                continue

            self.editor.saved_data_image(reference, written.file_name)
            result.externalized.append(written)


def _abbreviate(reference: str, limit: int = 48) -> str:
    return reference if len(reference) <= limit else reference[:limit] + "..."
