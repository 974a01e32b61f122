from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import List

from core.domain import HealthStatus, ScheduleHealthSnapshot, SnapshotSource


@dataclass(frozen=True)
class TaskProgressSummary:
    task_count: int
    avg_actual: float
    avg_planned: float


@dataclass(frozen=True)
class LedgerSummary:
    bac: float
    total_resources: int = 0
    resources_with_costs: int = 0

    @property
    def resource_coverage(self) -> float:
        if self.total_resources <= 0:
            return 0.0
        return min(1.0, self.resources_with_costs / self.total_resources)


@dataclass(frozen=True)
class EvmMetrics:
    bac: float
    pv: float
    ev: float
    ac: float
    spi: float
    cpi: float
    schedule_variance: float
    cost_variance: float
    eac: float
    etc: float
    vac: float
    tcpi: float


@dataclass(frozen=True)
class HealthScoreWeights:
    schedule: float = 0.4
    cost: float = 0.4
    resource: float = 0.2


@dataclass(frozen=True)
class HealthScores:
    schedule_score: float
    cost_score: float
    resource_score: float
    overall_score: float


@dataclass
class ScheduleHealthMetrics:
    as_of: datetime
    overall_score: float
    schedule_score: float
    cost_score: float
    resource_score: float
    spi: float
    cpi: float
    schedule_variance: float
    cost_variance: float
    bac: float
    pv: float
    ev: float
    ac: float
    eac: float
    etc: float
    vac: float
    tcpi: float

    @staticmethod
    def combine(as_of: datetime, evm: EvmMetrics, scores: HealthScores) -> "ScheduleHealthMetrics":
        return ScheduleHealthMetrics(as_of=as_of, **asdict(scores), **asdict(evm))

    def as_dict(self) -> dict:
        payload = asdict(self)
        payload.pop("as_of")
        return payload

    def to_snapshot(
        self,
        project_id: str,
        snapshot_date: date,
        source: SnapshotSource = SnapshotSource.COMPUTED,
    ) -> ScheduleHealthSnapshot:
        return ScheduleHealthSnapshot.create(
            project_id=project_id,
            snapshot_date=snapshot_date,
            source=source,
            **self.as_dict(),
        )


@dataclass
class HealthAssessment:
    status: HealthStatus
    alerts: List[str] = field(default_factory=list)
