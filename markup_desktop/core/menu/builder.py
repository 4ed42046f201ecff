from __future__ import annotations

"""Build the command menu from a :class:`MenuConfiguration`.

The builder is deterministic and has no UI imports: it folds the command
table into ordered :class:`MenuGroup` objects whose entries carry labels,
accelerators and ready-to-call actions. Rendering into an actual menubar is
the job of :mod:`markup_desktop.ui.menu_bar`.
"""

import functools
import logging
from typing import Any, Callable, List, Mapping, Optional

from markup_desktop.core.interfaces import CommandInvoker
from markup_desktop.core.menu.accelerator import translate
from markup_desktop.core.menu.commands import (
    COMMANDS,
    GROUP_ORDER,
    TABLE_ADD_ACTIONS,
    TABLE_BORDER_ACTIONS,
    TABLE_CREATE_MAX,
    TABLE_DELETE_ACTIONS,
    TABLE_HEADER_ACTION,
    CommandSpec,
)
from markup_desktop.core.menu.configuration import MenuConfiguration
from markup_desktop.core.models import CommandEntry, MenuEntry, MenuGroup, Separator, Submenu

logger = logging.getLogger(__name__)

__all__ = ["MenuBuilder", "flatten", "build_file_menu", "FILE_ACCELERATORS"]

FILE_ACCELERATORS = {
    "open": "Cmd+O",
    "new": "Cmd+N",
    "save": "Cmd+S",
    "save_as": "Shift+Cmd+S",
}


class MenuBuilder:
    """Fold the command table into menu groups.

    Parameters
    ----------
    invoker
        Host callback ``invoker(command_id, **params)`` that runs a command
        in the editor. Every generated action is a partial over it.
    modifier_names
        Optional modifier mapping passed to :func:`translate`.
    """

    def __init__(self, invoker: CommandInvoker,
                 modifier_names: Optional[Mapping[str, str]] = None) -> None:
        self._invoker = invoker
        self._modifier_names = modifier_names

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def build(self, config: MenuConfiguration) -> List[MenuGroup]:
        """Return the non-empty groups in menu order."""
        groups: List[MenuGroup] = []
        for name in GROUP_ORDER:
            entries: List[MenuEntry] = []
            for spec in COMMANDS:
                if spec.group != name or not self.is_included(spec, config):
                    continue
                entries.append(self._entry_for(spec, config))
            if entries:
                groups.append(MenuGroup(name=name, entries=entries))
            else:
                logger.debug("Menu group %s omitted: no qualifying commands", name)
        return groups

    @staticmethod
    def is_included(spec: CommandSpec, config: MenuConfiguration) -> bool:
        """A command shows when its toolbar entry is visible OR it has a key binding."""
        if config.binding(spec.command_id) is not None:
            return True
        if not config.group_visible(spec.toolbar_group):
            return False
        if spec.flag is None:
            return True
        return bool(config.flag(spec.toolbar_group, spec.flag))

    def accelerator_for(self, command_id: str, config: MenuConfiguration) -> Optional[str]:
        binding = config.binding(command_id)
        if binding is None:
            return None
        try:
            return translate(binding, self._modifier_names)
        except ValueError as exc:
            logger.warning("Ignoring key binding for %s: %s", command_id, exc)
            return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _action(self, command_id: str, **params: Any) -> Callable[[], Any]:
        return functools.partial(self._invoker, command_id, **params)

    def _entry_for(self, spec: CommandSpec, config: MenuConfiguration) -> MenuEntry:
        if spec.is_table:
            return self._table_submenu(spec, config)
        return CommandEntry(
            label=self._label_for(spec, config),
            action=self._action(spec.command_id),
            accelerator=self.accelerator_for(spec.command_id, config),
            command_id=spec.command_id,
        )

    @staticmethod
    def _label_for(spec: CommandSpec, config: MenuConfiguration) -> str:
        if spec.label_from_flag and spec.flag is not None:
            value = config.flag(spec.toolbar_group, spec.flag)
            if value and isinstance(value, str):
                return value
        return spec.label

    def _table_submenu(self, spec: CommandSpec, config: MenuConfiguration) -> Submenu:
        create = Submenu(label="Create", entries=[
            CommandEntry(
                label=f"{rows}x{cols}",
                action=self._action("insertTable", rows=rows, cols=cols),
                command_id="insertTable",
            )
            for rows in range(1, TABLE_CREATE_MAX + 1)
            for cols in range(1, TABLE_CREATE_MAX + 1)
        ])

        add_actions = list(TABLE_ADD_ACTIONS)
        if config.flag("tableMenu", "header"):
            add_actions.append(TABLE_HEADER_ACTION)
        add = Submenu(label="Add", entries=self._entries(add_actions))
        delete = Submenu(label="Delete", entries=self._entries(TABLE_DELETE_ACTIONS))

        entries: List[MenuEntry] = [create, add, delete]
        if config.flag("tableMenu", "border"):
            entries.append(Submenu(label="Border", entries=self._entries(TABLE_BORDER_ACTIONS)))
        return Submenu(label=spec.label, entries=entries, command_id=spec.command_id)

    def _entries(self, actions) -> List[MenuEntry]:
        return [
            CommandEntry(label=label, action=self._action(command_id, **params), command_id=command_id)
            for label, command_id, params in actions
        ]


def flatten(groups: List[MenuGroup]) -> List[MenuEntry]:
    """Concatenate groups with a separator between each pair (none trailing)."""
    entries: List[MenuEntry] = []
    for index, group in enumerate(groups):
        if index:
            entries.append(Separator())
        entries.extend(group.entries)
    return entries


def build_file_menu(*, open_document: Callable[[], Any], new_document: Callable[[], Any],
                    save_document: Callable[[], Any], save_document_as: Callable[[], Any]) -> MenuGroup:
    """Return the fixed File group (Open, New, Save, Save As)."""
    return MenuGroup(name="File", entries=[
        CommandEntry(label="Open...", action=open_document, accelerator=FILE_ACCELERATORS["open"], command_id="open"),
        CommandEntry(label="New", action=new_document, accelerator=FILE_ACCELERATORS["new"], command_id="new"),
        CommandEntry(label="Save", action=save_document, accelerator=FILE_ACCELERATORS["save"], command_id="save"),
        CommandEntry(label="Save As...", action=save_document_as, accelerator=FILE_ACCELERATORS["save_as"],
                     command_id="save_as"),
    ])
