"""Render menu groups into a Tk menubar and bind their accelerators.

This module is presentation-only: it receives :class:`MenuGroup` objects
from :mod:`markup_desktop.core.menu` and turns them into ``tk.Menu``
cascades. Accelerator strings (``Cmd+B``) are converted to Tk event
patterns (``<Control-b>``, ``<Command-b>`` on macOS) so that the shortcut
shown next to an item is also the one that fires it.

Notes
-----
- Item callbacks are wrapped so that an exception in a command is logged
  instead of propagating into the Tk mainloop.
- Rebuilding a cascade first removes the key bindings installed for it.
"""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from markup_desktop.core.models import CommandEntry, MenuEntry, MenuGroup, Separator, Submenu
from markup_desktop.core.menu.builder import flatten

logger = logging.getLogger(__name__)

__all__ = ["MenuBar", "to_tk_sequence", "display_accelerator"]

_KEYSYMS: Dict[str, str] = {
    "`": "grave",
    ",": "comma",
    ".": "period",
    "[": "bracketleft",
    "]": "bracketright",
    "-": "minus",
    "=": "equal",
    "+": "plus",
    "/": "slash",
    "\\": "backslash",
    ";": "semicolon",
    "'": "apostrophe",
    " ": "space",
    "Space": "space",
    "Enter": "Return",
    "Backspace": "BackSpace",
    "ArrowLeft": "Left",
    "ArrowRight": "Right",
    "ArrowUp": "Up",
    "ArrowDown": "Down",
    "Esc": "Escape",
}


def _split_accelerator(accelerator: str) -> Tuple[List[str], str]:
    if accelerator.endswith("++") or accelerator == "+":
        head, key = accelerator[:-2], "+"
    else:
        head, _, key = accelerator.rpartition("+")
    return ([m for m in head.split("+") if m] if head else []), key


def _is_mac(platform: Optional[str]) -> bool:
    return (platform or sys.platform) == "darwin"


def to_tk_sequence(accelerator: str, platform: Optional[str] = None) -> Optional[str]:
    """Return the Tk event pattern for *accelerator*, or None if it has no key.

    ``Cmd`` maps to ``Command`` on macOS and ``Control`` elsewhere; ``Alt``
    maps to ``Option`` on macOS. Letters are lower-case unless Shift is held,
    digits use the ``Key-`` prefix.

    Examples:
        >>> to_tk_sequence("Cmd+B", platform="linux")
        '<Control-b>'
        >>> to_tk_sequence("Shift+Cmd+S", platform="darwin")
        '<Shift-Command-S>'
    """
    if not accelerator:
        return None
    modifiers, key = _split_accelerator(accelerator)
    if not key:
        return None

    mac = _is_mac(platform)
    names = {
        "Cmd": "Command" if mac else "Control",
        "Ctrl": "Control",
        "Alt": "Option" if mac else "Alt",
        "Shift": "Shift",
    }
    tk_modifiers: List[str] = []
    for modifier in modifiers:
        name = names.get(modifier, modifier)
        if name not in tk_modifiers:
            tk_modifiers.append(name)

    if len(key) == 1 and key.isalpha():
        keysym = key.upper() if "Shift" in tk_modifiers else key.lower()
    elif len(key) == 1 and key.isdigit():
        keysym = f"Key-{key}"
    else:
        keysym = _KEYSYMS.get(key, key)
    return "<" + "-".join(tk_modifiers + [keysym]) + ">"


def display_accelerator(accelerator: Optional[str], platform: Optional[str] = None) -> Optional[str]:
    """Text shown beside a menu item; ``Cmd`` reads ``Ctrl`` off macOS."""
    if not accelerator or _is_mac(platform):
        return accelerator
    modifiers, key = _split_accelerator(accelerator)
    shown = ["Ctrl" if m == "Cmd" else m for m in modifiers]
    return "+".join(shown + [key])


class MenuBar:
    """Owns the window menubar and the key bindings of its items.

    Parameters
    ----------
    root : tk.Tk
        Window receiving the menubar.
    key_targets : Sequence[tk.Misc], optional
        Widgets whose own bindings would otherwise consume shortcuts (the
        text view binds Control-o, Control-b, ...). Shortcuts are bound on
        them directly and return ``"break"``.
    platform : str, optional
        Overrides ``sys.platform`` for accelerator conversion.
    """

    def __init__(self, root: tk.Tk, *, key_targets: Sequence[tk.Misc] = (),
                 platform: Optional[str] = None) -> None:
        self._root = root
        self._key_targets = list(key_targets)
        self._platform = platform
        self._menubar = tk.Menu(root, tearoff=False)
        self._cascades: Dict[str, tk.Menu] = {}
        self._bindings: Dict[str, List[Tuple[Optional[tk.Misc], str]]] = {}
        root.configure(menu=self._menubar)

    @property
    def menubar(self) -> tk.Menu:
        return self._menubar

    def cascade(self, label: str) -> Optional[tk.Menu]:
        return self._cascades.get(label)

    def set_cascade(self, label: str, groups: Iterable[MenuGroup]) -> tk.Menu:
        """Create or replace the top-level cascade *label* with *groups*."""
        groups = list(groups)
        self._unbind(label)

        menu = self._cascades.get(label)
        if menu is None:
            menu = tk.Menu(self._menubar, tearoff=False)
            self._menubar.add_cascade(label=label, menu=menu)
            self._cascades[label] = menu
        else:
            menu.delete(0, "end")
            for child in list(menu.winfo_children()):
                child.destroy()

        entries = flatten(groups)
        self._render(menu, entries)
        self._bind(label, entries)
        logger.debug("Menu %s rendered with %d group(s)", label, len(groups))
        return menu

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _render(self, menu: tk.Menu, entries: List[MenuEntry]) -> None:
        for entry in entries:
            if isinstance(entry, Separator):
                menu.add_separator()
            elif isinstance(entry, Submenu):
                child = tk.Menu(menu, tearoff=False)
                self._render(child, entry.entries)
                menu.add_cascade(label=entry.label, menu=child)
            elif entry.visible:
                options: Dict[str, Any] = {}
                shown = display_accelerator(entry.accelerator, self._platform)
                if shown:
                    options["accelerator"] = shown
                menu.add_command(
                    label=entry.label,
                    command=lambda action=entry.action, label=entry.label: self._execute_command(action, label),
                    **options,
                )

    def _execute_command(self, callback: Callable[[], Any], label: str) -> None:
        """Run a menu action, logging instead of raising into the mainloop."""
        try:
            callback()
        except Exception:
            logger.exception("Menu command '%s' failed", label)

    # ------------------------------------------------------------------
    # Key bindings
    # ------------------------------------------------------------------
    def _bind(self, label: str, entries: List[MenuEntry]) -> None:
        installed: List[Tuple[Optional[tk.Misc], str]] = []
        for entry in _commands(entries):
            if not entry.accelerator or not entry.visible:
                continue
            sequence = to_tk_sequence(entry.accelerator, self._platform)
            if sequence is None:
                continue

            def handler(_event=None, action=entry.action, name=entry.label):
                self._execute_command(action, name)
                return "break"

            try:
                self._root.bind_all(sequence, handler)
                installed.append((None, sequence))
                for target in self._key_targets:
                    target.bind(sequence, handler)
                    installed.append((target, sequence))
            except tk.TclError as exc:
                logger.warning("Cannot bind %s for '%s': %s", sequence, entry.label, exc)
        self._bindings[label] = installed

    def _unbind(self, label: str) -> None:
        for target, sequence in self._bindings.pop(label, []):
            try:
                if target is None:
                    self._root.unbind_all(sequence)
                else:
                    target.unbind(sequence)
            except tk.TclError:
                logger.debug("Binding %s already gone", sequence)


def _commands(entries: Iterable[MenuEntry]) -> Iterable[CommandEntry]:
    for entry in entries:
        if isinstance(entry, Submenu):
            yield from _commands(entry.entries)
        elif isinstance(entry, CommandEntry):
            yield entry
