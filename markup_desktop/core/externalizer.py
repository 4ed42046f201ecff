from __future__ import annotations

"""Write decoded embedded images to uniquely named sibling files."""

import logging
import uuid
from pathlib import Path
from typing import Callable, Optional

from markup_desktop.core.exceptions import DocumentIOError
from markup_desktop.core.models import DecodedImage, ExternalizedImageFile

logger = logging.getLogger(__name__)

__all__ = ["ImageExternalizer", "generate_image_name"]

FileWriter = Callable[[Path, bytes], None]


def generate_image_name(extension: str) -> str:
    """Return a collision-resistant file name ``<uuid>.<extension>``."""
    return f"{uuid.uuid4().hex}.{extension}"


def _write_bytes(path: Path, data: bytes) -> None:
    path.write_bytes(data)


class ImageExternalizer:
    """Persist :class:`DecodedImage` payloads next to the document.

    Parameters
    ----------
    writer
        File-write capability ``(path, data) -> None``. Defaults to
        :meth:`pathlib.Path.write_bytes`; tests swap it to simulate failures.
    """

    def __init__(self, writer: Optional[FileWriter] = None) -> None:
        self._writer = writer or _write_bytes

    def externalize(self, decoded: DecodedImage, target_directory: Path | str) -> str:
        """Write *decoded* into *target_directory* and return the bare file name.

        Raises:
            DocumentIOError: if the file cannot be written
        """
        return self.externalize_file(decoded, target_directory).file_name

    def externalize_file(self, decoded: DecodedImage,
                         target_directory: Path | str) -> ExternalizedImageFile:
        directory = Path(target_directory)
        file_name = generate_image_name(decoded.extension)
        path = directory / file_name
        try:
            self._writer(path, decoded.payload)
        except OSError as exc:
            logger.error("I/O FAIL: write image path=%s", path, exc_info=True)
            raise DocumentIOError("Could not write image file", path, exc) from exc
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("I/O: wrote image path=%s bytes=%d", path, len(decoded.payload))
        return ExternalizedImageFile(file_name=file_name, directory=directory)
