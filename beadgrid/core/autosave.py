from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from ..models.pattern import Pattern
from ..settings import AUTOSAVE_KEY
from ..storage import get_storage

logger = logging.getLogger(__name__)


class Autosaver:
    """
    Mirrors the current pattern into a key-value store under one fixed key.

    Storage problems (missing backend, quota, permissions, corrupt data) are
    logged and otherwise ignored: editing always carries on in memory.
    """

    def __init__(self, storage, key: str = AUTOSAVE_KEY) -> None:
        self.storage = storage
        self.key = key

    @property
    def path(self) -> str:
        return f"autosave/{self.key}.json"

    def save(self, pattern: Pattern) -> bool:
        try:
            self.storage.save_json(self.path, pattern.model_dump())
        except Exception as exc:
            logger.warning("Autosave to %s failed: %s", self.path, exc)
            return False
        return True

    def load(self) -> Optional[Pattern]:
        try:
            data = self.storage.load_json(self.path)
        except KeyError:
            return None
        except Exception as exc:
            logger.warning("Autosave at %s is unreadable: %s", self.path, exc)
            return None
        try:
            return Pattern.model_validate(data)
        except ValidationError as exc:
            logger.warning("Autosave at %s does not hold a pattern: %s", self.path, exc)
            return None

    def load_or_default(self) -> Pattern:
        return self.load() or Pattern.default()

    def observe(self, old: Pattern, new: Pattern) -> None:
        self.save(new)


def open_autosaver(key: str = AUTOSAVE_KEY) -> Optional[Autosaver]:
    """Autosaver on the shared store, or ``None`` when no store can be opened."""
    try:
        storage = get_storage()
    except Exception as exc:
        logger.warning("Storage unavailable, editing without autosave: %s", exc)
        return None
    return Autosaver(storage, key)


__all__ = ["Autosaver", "open_autosaver"]
