from __future__ import annotations

import json
import logging
from datetime import date
from importlib.metadata import PackageNotFoundError

from infra import version as version_mod
from infra.logging_config import setup_logging
from infra.operational_support import (
    SNAPSHOT_WRITE_FAILED,
    OperationalSupport,
    SupportEvent,
    TraceIdLogFilter,
    bind_trace_id,
    current_trace_id,
)


def _read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_snapshot_write_failure_event_is_one_json_line(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    with bind_trace_id("trc-test-123"):
        trace_id = support.snapshot_write_failed(
            project_id="p-1",
            snapshot_date=date(2024, 6, 11),
            error_code="SNAPSHOT_WRITE_FAILED",
            message="Health snapshot for project p-1 not stored",
        )

    assert trace_id == "trc-test-123"
    rows = _read_lines(events_path)
    assert len(rows) == 1
    payload = rows[0]
    assert payload["event_type"] == SNAPSHOT_WRITE_FAILED
    assert payload["level"] == "WARNING"
    assert payload["trace_id"] == "trc-test-123"
    assert payload["project_id"] == "p-1"
    assert payload["snapshot_date"] == "2024-06-11"
    assert payload["error_code"] == "SNAPSHOT_WRITE_FAILED"
    assert payload["app_version"]
    assert payload["timestamp_utc"]


def test_events_append_and_get_fresh_trace_outside_a_request(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "nested" / "events.jsonl")

    first = support.snapshot_write_failed(
        project_id="p-1", snapshot_date=date(2024, 6, 11), error_code="X", message="one"
    )
    second = support.emit_event(
        SupportEvent(event_type="health.custom", message="two", trace_id="trc-b", level="INFO")
    )

    rows = _read_lines(support.events_path)
    assert [r["event_type"] for r in rows] == [SNAPSHOT_WRITE_FAILED, "health.custom"]
    assert first.startswith("trc-")
    assert second == "trc-b"
    assert rows[1]["project_id"] is None


def test_bind_trace_id_nests_and_restores():
    assert current_trace_id() is None
    with bind_trace_id() as outer:
        assert outer.startswith("trc-")
        with bind_trace_id() as inner:
            # no explicit id: keep the enclosing one
            assert inner == outer
        with bind_trace_id("explicit") as explicit:
            assert explicit == "explicit"
        assert current_trace_id() == outer
    assert current_trace_id() is None


def test_trace_filter_sets_placeholder_without_trace():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    assert TraceIdLogFilter().filter(record) is True
    assert record.trace_id == "-"


def test_setup_logging_writes_trace_ids_to_file(tmp_path):
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path)
        with bind_trace_id("trc-logging-1"):
            logging.getLogger("core.services.health").warning("snapshot skipped")
        setup_logging(log_dir=tmp_path)
        assert len(root.handlers) == 2
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    assert log_file == tmp_path / "schedule_health.log"
    text = log_file.read_text(encoding="utf-8")
    assert "trace=trc-logging-1" in text
    assert "snapshot skipped" in text


def test_get_app_version_prefers_env_override(monkeypatch):
    monkeypatch.setenv("SCHEDULE_HEALTH_APP_VERSION", "9.9.9")

    assert version_mod.get_app_version() == "9.9.9"


def test_get_app_version_falls_back_when_not_installed(monkeypatch):
    def _missing(name):
        raise PackageNotFoundError(name)

    monkeypatch.setattr(version_mod, "version", _missing)
    monkeypatch.delenv("SCHEDULE_HEALTH_APP_VERSION", raising=False)

    assert version_mod.get_app_version() == version_mod._DEFAULT_APP_VERSION
