from __future__ import annotations

"""Structural edits on the HTML table around a caret position.

The enclosing ``<table>`` is found by character offset, parsed with lxml,
edited and spliced back into the markup, so the rest of the document keeps
its exact text. Nested tables are not tracked: the innermost ``<table>``
opened before the caret is the one edited.
"""

import logging
import re
from typing import Any, List, Optional, Tuple

from lxml import etree as ET
from lxml import html as LH

from markup_desktop.core.utils import HTML_PARSER

logger = logging.getLogger(__name__)

__all__ = [
    "TABLE_COMMANDS",
    "BORDER_CLASS_PREFIX",
    "table_markup",
    "locate_table",
    "edit_table",
]

TABLE_COMMANDS = ("addRow", "addCol", "addHeader", "deleteTableArea", "borderTable")
BORDER_CLASS_PREFIX = "bordered-table-"

_TABLE_OPEN_RE = re.compile(r"<table\b", re.IGNORECASE)
_TABLE_CLOSE_RE = re.compile(r"</table\s*>", re.IGNORECASE)
_ROW_RE = re.compile(r"<tr\b", re.IGNORECASE)
_CELL_RE = re.compile(r"<t[dh]\b", re.IGNORECASE)


def table_markup(rows: int, cols: int) -> str:
    """Empty table with *rows* body rows and *cols* columns."""
    cells = "".join("<td></td>" for _ in range(cols))
    body = "".join(f"<tr>{cells}</tr>" for _ in range(rows))
    return f"<table><tbody>{body}</tbody></table>"


def locate_table(markup: str, offset: int) -> Optional[Tuple[int, int]]:
    """Return the ``(start, end)`` span of the table containing *offset*."""
    start = None
    for match in _TABLE_OPEN_RE.finditer(markup, 0, offset):
        start = match.start()
    if start is None:
        return None
    close = _TABLE_CLOSE_RE.search(markup, start)
    if close is None or close.end() <= offset:
        return None
    return start, close.end()


def _caret_cell(markup: str, start: int, offset: int) -> Tuple[int, int]:
    before = markup[start:offset]
    rows = list(_ROW_RE.finditer(before))
    if not rows:
        return 0, 0
    col = len(_CELL_RE.findall(before, rows[-1].start())) - 1
    return len(rows) - 1, max(col, 0)


def _cells(row: ET._Element) -> List[ET._Element]:
    return [c for c in row if isinstance(c.tag, str) and c.tag.lower() in ("td", "th")]


def edit_table(markup: str, offset: int, command_id: str, **params: Any) -> Optional[str]:
    """Apply a table command at *offset* and return the new markup.

    Returns ``None`` when the caret is not inside a table or the command
    leaves the table as it was.
    """
    if command_id not in TABLE_COMMANDS:
        raise ValueError(f"Not a table command: {command_id}")

    span = locate_table(markup, offset)
    if span is None:
        logger.info("%s ignored: caret is not inside a table", command_id)
        return None
    start, end = span
    row_index, col_index = _caret_cell(markup, start, offset)

    table = LH.fragment_fromstring(markup[start:end], parser=HTML_PARSER)
    rows = list(table.iter("tr"))
    row = rows[min(row_index, len(rows) - 1)] if rows else None

    if command_id == "addRow":
        changed = _add_row(table, row, params.get("direction", "after"))
    elif command_id == "addCol":
        changed = _add_col(rows, col_index, params.get("direction", "after"))
    elif command_id == "addHeader":
        changed = _add_header(table, rows)
    elif command_id == "borderTable":
        changed = _set_border(table, params.get("border", "cell"))
    else:
        area = params.get("area", "row")
        if area == "table" or not _delete_area(rows, row, col_index, area):
            logger.debug("Table removed at offset %d", offset)
            return markup[:start] + markup[end:]
        changed = True

    if not changed:
        return None
    replacement = ET.tostring(table, encoding="unicode", method="html")
    return markup[:start] + replacement + markup[end:]


def _add_row(table: ET._Element, row: Optional[ET._Element], direction: str) -> bool:
    width = len(_cells(row)) if row is not None else 1
    new_row = table.makeelement("tr", {})
    for _ in range(max(width, 1)):
        new_row.append(table.makeelement("td", {}))
    if row is None:
        body = table.find("tbody")
        (body if body is not None else table).append(new_row)
    elif direction == "before":
        row.addprevious(new_row)
    else:
        row.addnext(new_row)
    return True


def _add_col(rows: List[ET._Element], col_index: int, direction: str) -> bool:
    if not rows:
        return False
    index = col_index + (0 if direction == "before" else 1)
    for row in rows:
        cells = _cells(row)
        tag = "th" if cells and all(c.tag.lower() == "th" for c in cells) else "td"
        cell = row.makeelement(tag, {})
        if index < len(cells):
            cells[index].addprevious(cell)
        elif cells:
            cells[-1].addnext(cell)
        else:
            row.append(cell)
    return True


def _add_header(table: ET._Element, rows: List[ET._Element]) -> bool:
    if table.find("thead") is not None:
        return False
    width = max((len(_cells(r)) for r in rows), default=1)
    head = table.makeelement("thead", {})
    head_row = head.makeelement("tr", {})
    for _ in range(max(width, 1)):
        head_row.append(head.makeelement("th", {}))
    head.append(head_row)
    table.insert(0, head)
    return True


def _delete_area(rows: List[ET._Element], row: Optional[ET._Element], col_index: int, area: str) -> bool:
    """Delete a row or a column; return False when the table is left empty."""
    if area == "row" and row is not None:
        row.getparent().remove(row)
        return len(rows) > 1
    if area == "col":
        for r in rows:
            cells = _cells(r)
            if col_index < len(cells):
                r.remove(cells[col_index])
        return any(_cells(r) for r in rows)
    return bool(rows)


def _set_border(table: ET._Element, border: str) -> bool:
    before = table.get("class") or ""
    classes = [c for c in before.split() if not c.startswith(BORDER_CLASS_PREFIX)]
    classes.append(BORDER_CLASS_PREFIX + border)
    after = " ".join(classes)
    if after == before:
        return False
    table.set("class", after)
    return True
