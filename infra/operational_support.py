from __future__ import annotations

import json
import logging
import os
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Iterator

from infra.path import user_data_dir
from infra.version import get_app_version

SNAPSHOT_WRITE_FAILED = "health.snapshot.write_failed"

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("health_trace_id", default=None)


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"trc-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return _TRACE_ID_CTX.get()


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """
    Run a block under one trace id.

    An explicit id wins; otherwise an enclosing id is reused, so nested calls
    from one CLI invocation share a trace.
    """
    resolved = (trace_id or "").strip() or current_trace_id() or create_trace_id()
    token = _TRACE_ID_CTX.set(resolved)
    try:
        yield resolved
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    message: str
    trace_id: str
    level: str = "WARNING"
    project_id: str | None = None
    snapshot_date: str | None = None
    error_code: str | None = None
    timestamp_utc: str = field(default_factory=_utc_now_iso)
    app_version: str = field(default_factory=get_app_version)
    pid: int = field(default_factory=os.getpid)


class OperationalSupport:
    """JSONL log of health events worth a follow-up, one line per event."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        if events_path is None:
            events_path = user_data_dir() / "logs" / "support-events.jsonl"
        self._events_path = Path(events_path)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(self, event: SupportEvent) -> str:
        line = json.dumps(asdict(event), ensure_ascii=True, sort_keys=True)
        with self._lock:
            with self._events_path.open("a", encoding="utf-8") as handle:
                handle.write(line)
                handle.write("\n")
        return event.trace_id

    def snapshot_write_failed(
        self,
        *,
        project_id: str,
        snapshot_date: date,
        error_code: str,
        message: str,
    ) -> str:
        return self.emit_event(
            SupportEvent(
                event_type=SNAPSHOT_WRITE_FAILED,
                message=message,
                trace_id=current_trace_id() or create_trace_id(),
                project_id=project_id,
                snapshot_date=snapshot_date.isoformat(),
                error_code=error_code,
            )
        )


_GLOBAL_SUPPORT: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


__all__ = [
    "SNAPSHOT_WRITE_FAILED",
    "OperationalSupport",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
]
