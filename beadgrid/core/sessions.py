from __future__ import annotations

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, Iterable, Optional, TypeVar

from ..models.pattern import Pattern
from .autosave import Autosaver
from .controller import EditorController
from .render import PatternView

T = TypeVar("T")


@dataclass
class SessionRecord:
    session_id: str
    controller: EditorController
    view: PatternView
    autosaver: Optional[Autosaver] = None
    created_at: float = field(default_factory=lambda: time.time())
    updated_at: float = field(default_factory=lambda: time.time())

    def to_dict(self, include_pattern: bool = False) -> dict:
        controller = self.controller
        data = {
            "session_id": self.session_id,
            "tool": controller.tool,
            "color": controller.color,
            "gesture": controller.state.name,
            "title": controller.pattern.title,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if include_pattern:
            data["pattern"] = controller.pattern.model_dump()
        return data


class SessionStore:
    """
    Live editing sessions.

    Each session's controller is single-threaded; ``run`` serialises every
    access through the store lock so events are applied one at a time.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = Lock()

    def create(
        self,
        session_id: str,
        *,
        pattern: Optional[Pattern] = None,
        autosaver: Optional[Autosaver] = None,
        device_pixel_ratio: float = 1.0,
    ) -> SessionRecord:
        if pattern is None:
            pattern = autosaver.load_or_default() if autosaver else Pattern.default()
        controller = EditorController(pattern)
        view = PatternView(pattern, device_pixel_ratio=device_pixel_ratio)
        controller.subscribe(view.observe)
        if autosaver is not None:
            controller.subscribe(autosaver.observe)
        record = SessionRecord(session_id=session_id, controller=controller, view=view, autosaver=autosaver)
        with self._lock:
            self._sessions[session_id] = record
        return record

    def run(self, session_id: str, action: Callable[[SessionRecord], T]) -> Optional[T]:
        """Apply ``action`` to a session under the lock; ``None`` if it does not exist."""
        with self._lock:
            record = self._sessions.get(session_id)
            if not record:
                return None
            result = action(record)
            record.updated_at = time.time()
            return result

    def get(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list(self) -> Iterable[SessionRecord]:
        with self._lock:
            records = list(self._sessions.values())
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records


store = SessionStore()
