from __future__ import annotations

"""Answer the editor's "select image" request.

Reads the chosen file, classifies its media type, embeds it as a ``data:``
reference and inserts it; the reference is externalized on the next save.
"""

import logging
from pathlib import Path

from markup_desktop.core.exceptions import DocumentIOError, UnsupportedMediaType
from markup_desktop.core.image_codec import classify_media_type, encode
from markup_desktop.core.interfaces import DialogProvider, EditorCapability
from markup_desktop.core.models import InsertResult, OperationStatus

logger = logging.getLogger(__name__)

__all__ = ["ImageInsertService"]


class ImageInsertService:

    def __init__(self, editor: EditorCapability, dialogs: DialogProvider) -> None:
        self.editor = editor
        self.dialogs = dialogs

    def select_and_insert(self) -> InsertResult:
        chosen = self.dialogs.ask_image_path()
        if not chosen:
            return InsertResult(status=OperationStatus.CANCELLED)
        return self.insert_file(Path(chosen))

    def insert_file(self, path: Path | str) -> InsertResult:
        path = Path(path)
        try:
            payload = path.read_bytes()
        except OSError as exc:
            error = DocumentIOError("Could not read image", path, exc)
            logger.error("Insert image failed: %s", error)
            return InsertResult(status=OperationStatus.FAILED, error=error)

        try:
            media_type = classify_media_type(payload, path.name)
        except UnsupportedMediaType as exc:
            logger.warning("Insert image skipped: %s", exc)
            return InsertResult(status=OperationStatus.FAILED, error=exc)

        self.editor.insert_image(encode(payload, media_type), alt=path.stem)
        logger.info("Inserted %s (%s, %d bytes)", path.name, media_type, len(payload))
        return InsertResult(status=OperationStatus.SUCCESS, media_type=media_type)
