from datetime import datetime, timedelta, timezone

import pytest

from timetable_backend.exceptions import SessionNotFoundError
from timetable_backend.scoring import DEFAULT_MORNING_WEIGHT
from timetable_backend.storage import COMPLETED, FAILED, PROCESSING, MemStorage, ScheduleSession


@pytest.fixture
def store():
    return MemStorage()


def new_session(session_id="abc", **fields):
    return ScheduleSession(session_id=session_id, dataset_filename="d.csv", config_filename="c.csv", **fields)


def test_create_and_get(store):
    store.create_session(new_session())
    session = store.get_session("abc")
    assert session.status == PROCESSING
    assert session.solution is None
    assert session.morning_weight == DEFAULT_MORNING_WEIGHT
    assert len(store) == 1


def test_update_returns_new_record(store):
    original = store.create_session(new_session())
    updated = store.update_session("abc", status=COMPLETED, solution={"status": "COMPLETE"})
    assert updated.status == COMPLETED
    assert original.status == PROCESSING
    assert store.get_session("abc").solution == {"status": "COMPLETE"}


def test_failed_session_keeps_message(store):
    store.create_session(new_session())
    store.update_session("abc", status=FAILED, error_message="boom")
    assert store.get_session("abc").error_message == "boom"


def test_unknown_sessions_raise(store):
    with pytest.raises(SessionNotFoundError):
        store.get_session("missing")
    with pytest.raises(SessionNotFoundError):
        store.update_session("missing", status=FAILED)


def test_expire_drops_only_old_finished_sessions(store):
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    old = now - timedelta(hours=2)
    store.create_session(new_session("done", status=COMPLETED, created_at=old))
    store.create_session(new_session("failed", status=FAILED, created_at=old))
    store.create_session(new_session("running", created_at=old))
    store.create_session(new_session("fresh", status=COMPLETED, created_at=now))

    assert store.expire_sessions(timedelta(hours=1), now=now) == 2
    assert len(store) == 2
    assert store.get_session("running").status == PROCESSING
    assert store.get_session("fresh").status == COMPLETED
    with pytest.raises(SessionNotFoundError):
        store.get_session("done")
