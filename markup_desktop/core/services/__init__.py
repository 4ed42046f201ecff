from __future__ import annotations

"""High-level orchestration services (save, open, confirmation, image insert)."""

from .confirmation_service import ConfirmationPolicy  # noqa: F401
from .save_service import SaveCoordinator  # noqa: F401
from .open_service import OpenCoordinator  # noqa: F401
from .image_insert_service import ImageInsertService  # noqa: F401

__all__: list[str] = [
    "ConfirmationPolicy",
    "SaveCoordinator",
    "OpenCoordinator",
    "ImageInsertService",
]
