from __future__ import annotations

"""Simple reusable markup and file helpers.

Markup helpers are side-effect-free; :func:`write_text_atomic` is the single
place the core writes a document file.
"""

import html as _html
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Iterator, Tuple
from urllib.parse import urlparse

from lxml import etree as ET
from lxml import html as LH

__all__ = [
    "RESOURCE_ATTRIBUTES",
    "HTML_PARSER",
    "looks_like_full_document",
    "parse_markup",
    "serialize_markup",
    "iter_resource_attributes",
    "is_relative_reference",
    "rebase_reference",
    "rebase_references",
    "write_text_atomic",
]

logger = logging.getLogger(__name__)

# (tag, attribute) pairs that reference external resources
RESOURCE_ATTRIBUTES: Tuple[Tuple[str, str], ...] = (
    ("img", "src"),
    ("source", "src"),
    ("video", "src"),
    ("video", "poster"),
    ("audio", "src"),
)

_FULL_DOC_RE = re.compile(r"^\s*(<!doctype\b|<html\b)", re.IGNORECASE)
_WINDOWS_DRIVE_RE = re.compile(r"^[a-zA-Z]:[\\/]")

# Embedded images routinely exceed libxml2's 10 MB text node limit
HTML_PARSER = LH.HTMLParser(huge_tree=True)


def looks_like_full_document(markup: str) -> bool:
    return bool(_FULL_DOC_RE.match(markup or ""))


def parse_markup(markup: str) -> Tuple[ET._Element, bool]:
    """Parse *markup* into an element tree.

    Fragments (the usual editor content) are wrapped in a ``div`` container;
    full documents keep their ``html`` root.

    Returns:
        Tuple of (root element, is_full_document)
    """
    if looks_like_full_document(markup):
        return LH.document_fromstring(markup, parser=HTML_PARSER), True
    return LH.fragment_fromstring(markup or "", create_parent="div", parser=HTML_PARSER), False


def serialize_markup(root: ET._Element, is_document: bool) -> str:
    """Inverse of :func:`parse_markup`."""
    if is_document:
        doctype = root.getroottree().docinfo.doctype
        return ET.tostring(root, encoding="unicode", method="html", doctype=doctype or None)
    parts = [_html.escape(root.text, quote=False) if root.text else ""]
    for child in root:
        parts.append(ET.tostring(child, encoding="unicode", method="html"))
    return "".join(parts)


def iter_resource_attributes(root: ET._Element) -> Iterator[Tuple[ET._Element, str, str]]:
    """Yield ``(element, attribute, value)`` for resource references in document order."""
    wanted = {}
    for tag, attr in RESOURCE_ATTRIBUTES:
        wanted.setdefault(tag, []).append(attr)
    for el in root.iter():
        if not isinstance(el.tag, str):
            continue  # comments, processing instructions
        for attr in wanted.get(el.tag.lower(), ()):
            value = el.get(attr)
            if value:
                yield el, attr, value


def is_relative_reference(value: str) -> bool:
    """Return True for a reference resolved against the document's directory."""
    if not value or value.startswith(("#", "/", "\\")):
        return False
    if _WINDOWS_DRIVE_RE.match(value):
        return False
    return not urlparse(value).scheme


def rebase_reference(value: str, old_base: str, new_base: str) -> str:
    """Re-express relative *value* (relative to *old_base*) relative to *new_base*."""
    target = os.path.normpath(os.path.join(old_base, value))
    try:
        rel = os.path.relpath(target, new_base)
    except ValueError:
        # Different drives on Windows; only an absolute reference works
        return Path(target).as_uri()
    return rel.replace(os.sep, "/")


def rebase_references(markup: str, old_base: str, new_base: str) -> Tuple[str, int]:
    """Rewrite relative resource references from *old_base* to *new_base*.

    The markup is returned untouched (same string) when nothing needed
    rewriting, so documents without relative references are not
    re-serialized.

    Returns:
        Tuple of (markup, number of rewritten references)
    """
    if not markup or os.path.normpath(old_base) == os.path.normpath(new_base):
        return markup, 0

    root, is_document = parse_markup(markup)
    changed = 0
    for el, attr, value in iter_resource_attributes(root):
        if not is_relative_reference(value):
            continue
        rebased = rebase_reference(value, old_base, new_base)
        if rebased != value:
            el.set(attr, rebased)
            changed += 1

    if not changed:
        return markup, 0
    logger.debug("Rebased %d reference(s) from %s to %s", changed, old_base, new_base)
    return serialize_markup(root, is_document), changed


def write_text_atomic(path: Path | str, text: str, encoding: str = "utf-8") -> None:
    """Write *text* to *path* through a sibling temp file and ``os.replace``.

    An interrupted write leaves the previous file intact.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
            fh.write(text)
        if path.exists():
            shutil.copymode(path, tmp_name)
        else:
            os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except Exception:
        logger.error("I/O FAIL: write document path=%s", path, exc_info=True)
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("I/O: wrote document path=%s chars=%d", path, len(text))
