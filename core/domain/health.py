from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from core.domain.enums import SnapshotSource
from core.domain.identifiers import generate_id

METRIC_FIELDS: tuple[str, ...] = (
    "overall_score",
    "schedule_score",
    "cost_score",
    "resource_score",
    "spi",
    "cpi",
    "schedule_variance",
    "cost_variance",
    "bac",
    "pv",
    "ev",
    "ac",
    "eac",
    "etc",
    "vac",
    "tcpi",
)


@dataclass
class ScheduleHealthSnapshot:
    id: str
    project_id: str
    snapshot_date: date
    overall_score: float = 0.0
    schedule_score: float = 0.0
    cost_score: float = 0.0
    resource_score: float = 0.0
    spi: float = 0.0
    cpi: float = 0.0
    schedule_variance: float = 0.0
    cost_variance: float = 0.0
    bac: float = 0.0
    pv: float = 0.0
    ev: float = 0.0
    ac: float = 0.0
    eac: float = 0.0
    etc: float = 0.0
    vac: float = 0.0
    tcpi: float = 0.0
    source: SnapshotSource = SnapshotSource.COMPUTED
    created_at: datetime = field(default_factory=datetime.now)

    @staticmethod
    def create(
        project_id: str,
        snapshot_date: date,
        source: SnapshotSource = SnapshotSource.COMPUTED,
        **metrics: float,
    ) -> "ScheduleHealthSnapshot":
        return ScheduleHealthSnapshot(
            id=generate_id(),
            project_id=project_id,
            snapshot_date=snapshot_date,
            source=source,
            **metrics,
        )

    def metrics(self) -> dict[str, float]:
        return {name: float(getattr(self, name)) for name in METRIC_FIELDS}


__all__ = ["METRIC_FIELDS", "ScheduleHealthSnapshot"]
