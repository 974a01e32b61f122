import threading
from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from core.domain import ScheduleHealthSnapshot, SnapshotSource
from core.exceptions import CollaboratorReadError, PersistenceWriteError
from core.services.health.history import HistoryRecorder
from core.services.health.policy import HISTORY_LIMIT
from infra.db.base import Base
from infra.db.health import SqlAlchemyHealthSnapshotRepository


def _snapshot(day: date, score: float = 50.0, project_id: str = "p-1") -> ScheduleHealthSnapshot:
    return ScheduleHealthSnapshot.create(
        project_id=project_id,
        snapshot_date=day,
        overall_score=score,
        spi=0.9,
        cpi=1.05,
        bac=12_345.67,
        tcpi=0.98,
    )


def _recorder(session) -> HistoryRecorder:
    return HistoryRecorder(session, SqlAlchemyHealthSnapshotRepository(session))


def test_record_is_idempotent_per_day(session):
    recorder = _recorder(session)
    day = date(2024, 6, 11)

    assert recorder.record("p-1", _snapshot(day, 70.0), day) is True
    assert recorder.record("p-1", _snapshot(day, 10.0), day) is False

    rows = recorder.history("p-1")
    assert len(rows) == 1
    # first write wins
    assert rows[0].overall_score == 70.0


def test_same_day_in_other_project_is_independent(session):
    recorder = _recorder(session)
    day = date(2024, 6, 11)

    assert recorder.record("p-1", _snapshot(day), day) is True
    assert recorder.record("p-2", _snapshot(day, project_id="p-2"), day) is True
    assert len(recorder.history("p-1")) == 1
    assert len(recorder.history("p-2")) == 1


def test_history_returns_stored_values_unchanged(session):
    recorder = _recorder(session)
    day = date(2024, 6, 11)
    recorder.record("p-1", _snapshot(day, 61.3), day)

    stored = recorder.history("p-1")[0]
    assert stored.snapshot_date == day
    assert stored.overall_score == 61.3
    assert stored.spi == 0.9
    assert stored.cpi == 1.05
    assert stored.bac == 12_345.67
    assert stored.tcpi == 0.98
    assert stored.source is SnapshotSource.COMPUTED


def test_history_is_capped_to_most_recent_days_in_date_order(session):
    recorder = _recorder(session)
    start = date(2024, 1, 1)
    days = [start + timedelta(days=i) for i in range(HISTORY_LIMIT + 5)]
    # insert out of order
    for i, day in reversed(list(enumerate(days))):
        recorder.record("p-1", _snapshot(day, float(i)), day)

    rows = recorder.history("p-1")

    assert len(rows) == HISTORY_LIMIT
    assert [r.snapshot_date for r in rows] == days[-HISTORY_LIMIT:]
    assert rows[-1].overall_score == float(len(days) - 1)


def test_history_for_unknown_project_is_empty(session):
    assert _recorder(session).history("nope") == []


def test_concurrent_writers_store_one_row(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'health.db'}", future=True)
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    day = date(2024, 6, 11)
    barrier = threading.Barrier(2)
    results: list[bool] = []
    lock = threading.Lock()

    def worker(score: float):
        db = Session()
        try:
            barrier.wait()
            inserted = _recorder(db).record("p-1", _snapshot(day, score), day)
            with lock:
                results.append(inserted)
        finally:
            db.close()

    threads = [threading.Thread(target=worker, args=(s,)) for s in (40.0, 90.0)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == [False, True]
    db = Session()
    try:
        assert len(_recorder(db).history("p-1")) == 1
    finally:
        db.close()
        engine.dispose()


class _BrokenSnapshotRepo:
    def try_insert(self, project_id, snapshot_date, snapshot):
        raise OperationalError("INSERT INTO schedule_health_snapshots", {}, Exception("disk full"))

    def recent(self, project_id, limit=HISTORY_LIMIT):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    def get(self, project_id, snapshot_date):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))


def test_write_failure_is_reported_as_persistence_error(session):
    recorder = HistoryRecorder(session, _BrokenSnapshotRepo())
    day = date(2024, 6, 11)

    with pytest.raises(PersistenceWriteError) as excinfo:
        recorder.record("p-1", _snapshot(day), day)
    assert excinfo.value.code == "SNAPSHOT_WRITE_FAILED"


def test_read_failure_is_reported_as_collaborator_error(session):
    recorder = HistoryRecorder(session, _BrokenSnapshotRepo())

    with pytest.raises(CollaboratorReadError) as excinfo:
        recorder.history("p-1")
    assert excinfo.value.code == "HISTORY_READ_FAILED"


def test_read_failure_releases_the_open_transaction(session):
    recorder = HistoryRecorder(session, _BrokenSnapshotRepo())
    session.execute(text("SELECT 1"))
    assert session.in_transaction()

    with pytest.raises(CollaboratorReadError):
        recorder.history("p-1")
    assert not session.in_transaction()

    session.execute(text("SELECT 1"))
    with pytest.raises(CollaboratorReadError):
        recorder.get("p-1", date(2024, 6, 11))
    assert not session.in_transaction()
