"""Translate editor keymap notation into menu accelerator strings.

The editor keymap uses ProseMirror-style sequences such as ``Mod-b`` or
``Shift-Ctrl-q``; menus want ``Cmd+B`` and ``Shift+Ctrl+Q``.
"""

from typing import Mapping, Optional, Sequence, Union

__all__ = ["DEFAULT_MODIFIER_NAMES", "KeySequence", "translate", "split_sequence"]

KeySequence = Union[str, Sequence[str]]

# "Mod" is the primary platform modifier, "Meta" the secondary one
DEFAULT_MODIFIER_NAMES: Mapping[str, str] = {
    "Mod": "Cmd",
    "Meta": "Alt",
}


def split_sequence(sequence: str) -> tuple[list[str], str]:
    """Split ``Mod-Shift-x`` into (``["Mod", "Shift"]``, ``"x"``).

    A trailing ``-`` after a separator (``Mod--``) or on its own names the
    minus key.
    """
    if sequence.endswith("-") and (len(sequence) == 1 or sequence[-2] == "-"):
        head, key = sequence[:-2], "-"
    else:
        head, _, key = sequence.rpartition("-")
    modifiers = head.split("-") if head else []
    return modifiers, key


def translate(key_sequence: KeySequence,
              modifier_names: Optional[Mapping[str, str]] = None) -> str:
    """Return the accelerator string for *key_sequence*.

    Only the first binding of a list is used. Single-character keys are
    upper-cased; key names (``Enter``, ``ArrowRight``) pass through, as do
    modifiers without a mapping.

    Examples:
        >>> translate("Mod-b")
        'Cmd+B'
        >>> translate(["Meta-1", "Ctrl-1"])
        'Alt+1'
        >>> translate("Enter")
        'Enter'
    """
    if not isinstance(key_sequence, str):
        if not key_sequence:
            raise ValueError("Empty key binding list")
        key_sequence = key_sequence[0]
    if not key_sequence:
        raise ValueError("Empty key sequence")

    names = DEFAULT_MODIFIER_NAMES if modifier_names is None else modifier_names
    modifiers, key = split_sequence(key_sequence)

    if len(key) == 1:
        key = key.upper()
    parts = [names.get(m, m) for m in modifiers]
    parts.append(key)
    return "+".join(parts)
