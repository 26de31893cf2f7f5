import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from .exceptions import SessionNotFoundError
from .scoring import DEFAULT_MORNING_WEIGHT
from .solver import SolutionDict

PROCESSING = "processing"
COMPLETED = "completed"
FAILED = "failed"


@dataclass(frozen=True)
class ScheduleSession:
    session_id: str
    dataset_filename: str
    config_filename: str
    status: str = PROCESSING
    morning_weight: float = DEFAULT_MORNING_WEIGHT
    error_message: Optional[str] = None
    solution: Optional[SolutionDict] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MemStorage:
    """In-process session store for upload-driven scheduling runs."""

    def __init__(self) -> None:
        self._sessions: Dict[str, ScheduleSession] = {}
        self._lock = threading.Lock()

    def create_session(self, session: ScheduleSession) -> ScheduleSession:
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> ScheduleSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def update_session(self, session_id: str, **changes) -> ScheduleSession:
        with self._lock:
            current = self._sessions.get(session_id)
            if current is None:
                raise SessionNotFoundError(session_id)
            updated = replace(current, **changes)
            self._sessions[session_id] = updated
        return updated

    def expire_sessions(self, max_age: timedelta, now: Optional[datetime] = None) -> int:
        """Drop finished sessions older than ``max_age``; running ones are kept."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            stale = [
                sid
                for sid, session in self._sessions.items()
                if session.status != PROCESSING and now - session.created_at > max_age
            ]
            for sid in stale:
                del self._sessions[sid]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


storage = MemStorage()
