from __future__ import annotations

from datetime import datetime, timezone
import logging
from threading import Lock
from typing import Callable

from careflow.application.ports.session_store_port import SessionStorePort
from careflow.domain.entities.session import SessionRecord


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySessionStore(SessionStorePort):
    """Process-local session records keyed by the hashed session token.

    Expired records are dropped by the session codec when they are next read,
    and every ``sweep_every`` saves the whole store is swept so records whose
    token never comes back do not pile up.
    """

    def __init__(self, *, sweep_every: int = 256, clock: Callable[[], datetime] = _utcnow):
        self._records: dict[str, SessionRecord] = {}
        self._lock = Lock()
        self._sweep_every = max(sweep_every, 1)
        self._saves_since_sweep = 0
        self._clock = clock

    def get(self, *, session_id: str) -> SessionRecord | None:
        with self._lock:
            return self._records.get(session_id)

    def save(self, record: SessionRecord) -> None:
        with self._lock:
            self._records[record.id] = record
            self._saves_since_sweep += 1
            if self._saves_since_sweep >= self._sweep_every:
                self._sweep_expired()

    def delete(self, *, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def purge_expired(self) -> int:
        with self._lock:
            return self._sweep_expired()

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _sweep_expired(self) -> int:
        # Caller holds the lock.
        now = self._clock()
        expired = [session_id for session_id, record in self._records.items() if record.is_expired(now=now)]
        for session_id in expired:
            del self._records[session_id]
        self._saves_since_sweep = 0
        if expired:
            logger.info("memory_session_store: swept_expired count=%s remaining=%s", len(expired), len(self._records))
        return len(expired)
