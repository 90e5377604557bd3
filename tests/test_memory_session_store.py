from __future__ import annotations

from datetime import datetime, timedelta, timezone

from careflow.domain.entities.session import SessionRecord
from careflow.infrastructure.sessions.memory_session_store import InMemorySessionStore


NOW = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _record(session_id: str, *, expires_in: timedelta) -> SessionRecord:
    return SessionRecord(id=session_id, account_id=None, created_at=NOW, expires_at=NOW + expires_in)


def test_save_sweeps_expired_records_that_are_never_read_again():
    clock = FakeClock(NOW)
    store = InMemorySessionStore(sweep_every=5, clock=clock)
    for index in range(4):
        store.save(_record(f"stale-{index}", expires_in=timedelta(minutes=1)))
    clock.now = NOW + timedelta(hours=1)

    store.save(_record("fresh", expires_in=timedelta(days=1)))

    assert len(store) == 1
    assert store.get(session_id="fresh") is not None
    assert store.get(session_id="stale-0") is None


def test_live_records_survive_a_sweep():
    clock = FakeClock(NOW)
    store = InMemorySessionStore(sweep_every=2, clock=clock)
    store.save(_record("a", expires_in=timedelta(hours=1)))
    store.save(_record("b", expires_in=timedelta(hours=1)))

    assert store.purge_expired() == 0
    assert len(store) == 2


def test_purge_expired_reports_removed_count():
    clock = FakeClock(NOW)
    store = InMemorySessionStore(sweep_every=100, clock=clock)
    store.save(_record("old", expires_in=timedelta(seconds=1)))
    store.save(_record("new", expires_in=timedelta(hours=1)))
    clock.now = NOW + timedelta(minutes=5)

    assert store.purge_expired() == 1
    assert store.get(session_id="new") is not None
