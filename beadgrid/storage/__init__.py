from __future__ import annotations

import logging
from typing import Optional

from ..settings import STORAGE_BACKEND
from .fs_storage import FSStorage

try:
    from .s3_storage import S3Storage  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    S3Storage = None  # type: ignore

logger = logging.getLogger(__name__)

_storage_instance: Optional[object] = None


def get_storage():
    """Return the process-wide key-value store used for autosave."""
    global _storage_instance
    if _storage_instance is not None:
        return _storage_instance

    backend = STORAGE_BACKEND.lower()
    if backend == "s3" and S3Storage is not None:
        _storage_instance = S3Storage()
    else:
        if backend == "s3":
            logger.warning("S3 backend requested but boto3 is unavailable; using filesystem storage")
        _storage_instance = FSStorage()
    return _storage_instance


def set_storage(storage: Optional[object]) -> None:
    """Override (or reset, with ``None``) the shared store."""
    global _storage_instance
    _storage_instance = storage


__all__ = ["FSStorage", "S3Storage", "get_storage", "set_storage"]
