"""Configuration-driven command menu: accelerator translation and builder."""

from .accelerator import translate
from .configuration import MenuConfiguration
from .builder import MenuBuilder, build_file_menu, flatten

__all__ = [
    "translate",
    "MenuConfiguration",
    "MenuBuilder",
    "build_file_menu",
    "flatten",
]
