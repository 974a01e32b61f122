from __future__ import annotations

from typing import Any

from core.domain import METRIC_FIELDS, ScheduleHealthSnapshot
from infra.db.models import ScheduleHealthSnapshotORM


def snapshot_to_values(snapshot: ScheduleHealthSnapshot) -> dict[str, Any]:
    values: dict[str, Any] = {
        "id": snapshot.id,
        "project_id": snapshot.project_id,
        "snapshot_date": snapshot.snapshot_date,
        "source": snapshot.source,
        "created_at": snapshot.created_at,
    }
    for name in METRIC_FIELDS:
        values[name] = float(getattr(snapshot, name))
    return values


def snapshot_from_orm(obj: ScheduleHealthSnapshotORM) -> ScheduleHealthSnapshot:
    return ScheduleHealthSnapshot(
        id=obj.id,
        project_id=obj.project_id,
        snapshot_date=obj.snapshot_date,
        source=obj.source,
        created_at=obj.created_at,
        **{name: getattr(obj, name) for name in METRIC_FIELDS},
    )


__all__ = ["snapshot_to_values", "snapshot_from_orm"]
