from __future__ import annotations

"""Embedded image reference codec.

Decodes self-describing ``data:`` references (``data:image/png;base64,...``)
into raw bytes plus a file extension, and builds such references for images
inserted from disk. Pure functions, no file I/O.
"""

import base64
import binascii
import io
import logging
import mimetypes
import re
from typing import Optional
from urllib.parse import unquote_to_bytes

from PIL import Image, UnidentifiedImageError

from markup_desktop.core.exceptions import DecodeError, UnsupportedMediaType
from markup_desktop.core.models import DecodedImage

logger = logging.getLogger(__name__)

__all__ = [
    "EMBED_SCHEME",
    "SUPPORTED_TOP_LEVEL_TYPES",
    "is_embedded",
    "parse_reference",
    "decode",
    "encode",
    "classify_media_type",
]

EMBED_SCHEME = "data:"
SUPPORTED_TOP_LEVEL_TYPES = ("image", "video")

# Subtypes become file extensions, so path separators and leading dots are refused
_SUBTYPE_RE = re.compile(r"^[a-z0-9][a-z0-9!#$&^_.+-]*$")


def is_embedded(reference: str) -> bool:
    return isinstance(reference, str) and reference[:len(EMBED_SCHEME)].lower() == EMBED_SCHEME


def parse_reference(reference: str) -> Optional[DecodedImage]:
    """Strictly decode *reference*.

    Returns ``None`` when the reference is not embedded at all (a file or
    network reference).

    Raises:
        UnsupportedMediaType: top-level type is not image or video
        DecodeError: the reference is malformed or its payload cannot be decoded
    """
    if not is_embedded(reference):
        return None

    header, sep, data = reference[len(EMBED_SCHEME):].partition(",")
    if not sep:
        raise DecodeError("Embedded reference has no data segment")

    # header: type/subtype[;param=value...][;base64]
    params = [p.strip() for p in header.split(";")]
    media_type = params[0].lower()
    is_base64 = any(p.lower() == "base64" for p in params[1:])

    top, slash, subtype = media_type.partition("/")
    if not slash or not top or not subtype:
        raise DecodeError(f"Malformed media type '{media_type}'")
    if top not in SUPPORTED_TOP_LEVEL_TYPES:
        raise UnsupportedMediaType(media_type)
    if not _SUBTYPE_RE.match(subtype):
        raise DecodeError(f"Unusable media subtype '{subtype}'")

    if is_base64:
        try:
            payload = base64.b64decode("".join(data.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Invalid base64 payload for {media_type}", cause=exc) from exc
    else:
        payload = unquote_to_bytes(data)

    return DecodedImage(payload=payload, extension=subtype, media_type=media_type)


def decode(reference: str) -> Optional[DecodedImage]:
    """Decode *reference*, returning ``None`` when it cannot be externalized.

    This is the lenient form of :func:`parse_reference`: unsupported media
    types and malformed references are logged and yield ``None``.
    """
    try:
        return parse_reference(reference)
    except UnsupportedMediaType as exc:
        logger.info("Not externalizable: %s", exc)
    except DecodeError as exc:
        logger.warning("Malformed embedded reference: %s", exc)
    return None


def encode(payload: bytes, media_type: str) -> str:
    """Build a base64 ``data:`` reference for *payload*."""
    b64 = base64.b64encode(payload).decode("ascii")
    return f"{EMBED_SCHEME}{media_type};base64,{b64}"


def classify_media_type(payload: bytes, file_name: Optional[str] = None) -> str:
    """Return the media type of *payload*.

    Images are identified from their content with Pillow; anything Pillow
    cannot open is looked up by *file_name* and accepted only as ``video/*``.

    Raises:
        UnsupportedMediaType: when neither check yields an image or video type
    """
    try:
        with Image.open(io.BytesIO(payload)) as img:
            fmt = img.format
        mime = Image.MIME.get(fmt or "")
        if mime and mime.startswith("image/"):
            return mime
        logger.debug("Pillow format %s has no image MIME type", fmt)
    except (UnidentifiedImageError, OSError) as exc:
        logger.debug("Pillow could not identify %s: %s", file_name or "<bytes>", exc)

    guessed = mimetypes.guess_type(file_name)[0] if file_name else None
    if guessed and guessed.split("/", 1)[0] in SUPPORTED_TOP_LEVEL_TYPES:
        return guessed
    raise UnsupportedMediaType(guessed, file_name)
