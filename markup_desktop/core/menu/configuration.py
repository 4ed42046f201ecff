from __future__ import annotations

"""Menu configuration derived from the editor's ``markupEditorConfig``."""

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from markup_desktop.core.menu.accelerator import KeySequence

__all__ = ["MenuConfiguration"]


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return copy.copy(value)


def _frozen(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(_plain(mapping or {}))


@dataclass(frozen=True)
class MenuConfiguration:
    """Keymap plus toolbar visibility, fixed for the lifetime of a session.

    Attributes
    ----------
    keymap
        Command id -> key sequence or list of key sequences.
    visibility
        Toolbar group id (``formatBar``, ``insertBar``...) -> bool.
    toolbar
        Toolbar group id -> {command id or flag -> bool or label}.
    """

    keymap: Mapping[str, KeySequence] = field(default_factory=dict)
    visibility: Mapping[str, bool] = field(default_factory=dict)
    toolbar: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keymap", _frozen(self.keymap))
        object.__setattr__(self, "visibility", _frozen(self.visibility))
        object.__setattr__(self, "toolbar", _frozen(self.toolbar))

    @classmethod
    def from_markup_config(cls, config: Optional[Mapping[str, Any]]) -> "MenuConfiguration":
        """Build from the editor shape ``{"toolbar": {"visibility": {...}, ...}, "keymap": {...}}``."""
        config = config or {}
        toolbar_cfg = dict(config.get("toolbar") or {})
        visibility = toolbar_cfg.pop("visibility", None) or {}
        groups = {k: v for k, v in toolbar_cfg.items() if isinstance(v, Mapping)}
        return cls(keymap=config.get("keymap") or {}, visibility=visibility, toolbar=groups)

    def binding(self, command_id: str) -> Optional[KeySequence]:
        """Return the keymap entry for *command_id*, or None when unset or empty."""
        value = self.keymap.get(command_id)
        if not value:
            return None
        return value

    def group_visible(self, group_id: str) -> bool:
        return bool(self.visibility.get(group_id, False))

    def flag(self, group_id: str, flag: str) -> Any:
        group = self.toolbar.get(group_id) or {}
        return group.get(flag)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "keymap": dict(self.keymap),
            "visibility": dict(self.visibility),
            "toolbar": {k: dict(v) for k, v in self.toolbar.items()},
        }
