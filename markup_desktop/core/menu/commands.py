"""Declarative table of the editor commands that can appear in the Format menu.

Each row names the menu group a command belongs to and the toolbar flag
that makes it visible. :class:`~markup_desktop.core.menu.builder.MenuBuilder`
folds the table into menu groups; the inclusion rule lives there, once.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "GROUP_INSERT",
    "GROUP_STYLE",
    "GROUP_LIST",
    "GROUP_FORMAT",
    "GROUP_SEARCH",
    "GROUP_ORDER",
    "CommandSpec",
    "COMMANDS",
    "TABLE_CREATE_MAX",
    "TABLE_ADD_ACTIONS",
    "TABLE_HEADER_ACTION",
    "TABLE_DELETE_ACTIONS",
    "TABLE_BORDER_ACTIONS",
]

GROUP_INSERT = "Insert"
GROUP_STYLE = "Style"
GROUP_LIST = "List"
GROUP_FORMAT = "Format"
GROUP_SEARCH = "Search"

GROUP_ORDER: Tuple[str, ...] = (GROUP_INSERT, GROUP_STYLE, GROUP_LIST, GROUP_FORMAT, GROUP_SEARCH)


@dataclass(frozen=True)
class CommandSpec:
    """One row of the command table.

    Attributes
    ----------
    command_id
        Keymap key and the id passed to the editor's ``perform``.
    group
        Menu group (one of :data:`GROUP_ORDER`).
    toolbar_group
        Key in the toolbar ``visibility`` mapping.
    flag
        Key inside the toolbar group; ``None`` when the group flag alone
        decides.
    label
        Default label.
    label_from_flag
        When True a string flag value replaces the default label.
    is_table
        Expands into the table submenu instead of a single entry.
    """

    command_id: str
    group: str
    toolbar_group: str
    flag: Optional[str]
    label: str
    label_from_flag: bool = False
    is_table: bool = False


def _style(command_id: str, label: str) -> CommandSpec:
    return CommandSpec(command_id, GROUP_STYLE, "styleMenu", command_id, label, label_from_flag=True)


def _format(command_id: str, label: str) -> CommandSpec:
    return CommandSpec(command_id, GROUP_FORMAT, "formatBar", command_id, label)


COMMANDS: Tuple[CommandSpec, ...] = (
    CommandSpec("link", GROUP_INSERT, "insertBar", "link", "Link"),
    CommandSpec("image", GROUP_INSERT, "insertBar", "image", "Image"),
    CommandSpec("table", GROUP_INSERT, "insertBar", "tableMenu", "Table", is_table=True),

    _style("p", "Body"),
    _style("h1", "H1"),
    _style("h2", "H2"),
    _style("h3", "H3"),
    _style("h4", "H4"),
    _style("h5", "H5"),
    _style("h6", "H6"),
    _style("pre", "Code"),

    CommandSpec("bullet", GROUP_LIST, "styleBar", "list", "Bullet List"),
    CommandSpec("number", GROUP_LIST, "styleBar", "list", "Numbered List"),
    CommandSpec("indent", GROUP_LIST, "styleBar", "dent", "Indent"),
    CommandSpec("outdent", GROUP_LIST, "styleBar", "dent", "Outdent"),

    _format("bold", "Bold"),
    _format("italic", "Italic"),
    _format("underline", "Underline"),
    _format("strikethrough", "Strikethrough"),
    _format("code", "Code"),
    _format("subscript", "Subscript"),
    _format("superscript", "Superscript"),

    CommandSpec("search", GROUP_SEARCH, "search", None, "Search"),
)

# Table submenu: (label, editor command, params)
TABLE_CREATE_MAX = 4
TABLE_ADD_ACTIONS: Tuple[Tuple[str, str, Dict[str, Any]], ...] = (
    ("Row Above", "addRow", {"direction": "before"}),
    ("Row Below", "addRow", {"direction": "after"}),
    ("Column Before", "addCol", {"direction": "before"}),
    ("Column After", "addCol", {"direction": "after"}),
)
TABLE_HEADER_ACTION: Tuple[str, str, Dict[str, Any]] = ("Header", "addHeader", {})
TABLE_DELETE_ACTIONS: Tuple[Tuple[str, str, Dict[str, Any]], ...] = (
    ("Row", "deleteTableArea", {"area": "row"}),
    ("Column", "deleteTableArea", {"area": "col"}),
    ("Table", "deleteTableArea", {"area": "table"}),
)
TABLE_BORDER_ACTIONS: Tuple[Tuple[str, str, Dict[str, Any]], ...] = (
    ("All", "borderTable", {"border": "cell"}),
    ("Outer", "borderTable", {"border": "outer"}),
    ("Header", "borderTable", {"border": "header"}),
    ("None", "borderTable", {"border": "none"}),
)
