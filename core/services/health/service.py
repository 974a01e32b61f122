from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from core.domain import METRIC_FIELDS, ScheduleHealthSnapshot, SnapshotSource
from core.exceptions import CollaboratorReadError, PersistenceWriteError, ValidationError
from core.interfaces import HealthSnapshotRepository, ResourceCostRepository, TaskRepository
from core.services.auth.authorization import require_identity
from core.services.auth.session import UserSessionContext
from core.services.health.evm import compute_evm
from core.services.health.history import HistoryRecorder
from core.services.health.ledger import CostLedgerAggregator
from core.services.health.models import HealthAssessment, HealthScoreWeights, ScheduleHealthMetrics
from core.services.health.policy import (
    DEFAULT_AC_OVERRUN_FACTOR,
    DEFAULT_WEIGHTS,
    validate_weights,
)
from core.services.health.progress import TaskProgressAggregator
from core.services.health.scoring import build_health_alerts, classify_health, compose_scores

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


_FIELD_ALIASES = {**{name: name for name in METRIC_FIELDS}, **{_camel(name): name for name in METRIC_FIELDS}}


def _require_project_id(project_id: Any) -> str:
    if isinstance(project_id, int) and not isinstance(project_id, bool):
        project_id = str(project_id)
    if not isinstance(project_id, str) or not project_id.strip():
        raise ValidationError("Project ID required.", code="PROJECT_ID_REQUIRED")
    return project_id.strip()


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid snapshot date: {value!r}", code="INVALID_DATE") from exc
    raise ValidationError(f"Unsupported date value: {value!r}", code="INVALID_DATE")


def _parse_manual_fields(fields: Mapping[str, Any]) -> dict[str, float]:
    if not isinstance(fields, Mapping):
        raise ValidationError("Snapshot fields must be a mapping.", code="INVALID_SNAPSHOT")

    values = {name: 0.0 for name in METRIC_FIELDS}
    for key, raw in fields.items():
        name = _FIELD_ALIASES.get(key)
        if name is None:
            raise ValidationError(f"Unknown snapshot field: {key!r}", code="INVALID_SNAPSHOT")
        if raw is None:
            continue
        if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
            raise ValidationError(f"Snapshot field {key!r} must be a number.", code="INVALID_SNAPSHOT")
        try:
            number = float(raw)
        except ValueError as exc:
            raise ValidationError(f"Snapshot field {key!r} must be a number.", code="INVALID_SNAPSHOT") from exc
        if not math.isfinite(number):
            raise ValidationError(f"Snapshot field {key!r} must be finite.", code="INVALID_SNAPSHOT")
        values[name] = number
    return values


class ScheduleHealthService:
    """
    Schedule health for one project: EVM indices, composite scores and the daily history.
    """

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        cost_repo: ResourceCostRepository,
        snapshot_repo: HealthSnapshotRepository,
        user_session: UserSessionContext | None = None,
        weights: HealthScoreWeights = DEFAULT_WEIGHTS,
        ac_overrun_factor: float = DEFAULT_AC_OVERRUN_FACTOR,
        support=None,
    ):
        self._progress = TaskProgressAggregator(task_repo)
        self._ledger = CostLedgerAggregator(cost_repo)
        self._history = HistoryRecorder(session, snapshot_repo)
        self._user_session = user_session
        self._weights = validate_weights(weights)
        self._ac_overrun_factor = float(ac_overrun_factor)
        self._support = support

    # --------------------------------------------------------------
    # Public API
    # --------------------------------------------------------------

    def get_health(self, project_id: Any, now: Optional[datetime] = None) -> ScheduleHealthMetrics:
        require_identity(self._user_session, operation_label="view schedule health")
        pid = _require_project_id(project_id)
        now = now or datetime.now()

        try:
            metrics = self._compute_health(pid, now)
        except CollaboratorReadError:
            # release the failed read so the shared session stays usable
            self._history.rollback()
            raise

        snapshot = metrics.to_snapshot(pid, now.date(), SnapshotSource.COMPUTED)
        try:
            self._history.record(pid, snapshot, now.date())
        except PersistenceWriteError as exc:
            logger.warning("Health snapshot for project %s not stored: %s", pid, exc)
            self._emit_write_failure(pid, now.date(), exc)

        return metrics

    def _compute_health(self, project_id: str, now: datetime) -> ScheduleHealthMetrics:
        progress = self._progress.aggregate(project_id, now)
        ledger = self._ledger.aggregate(project_id)

        evm = compute_evm(
            ledger.bac,
            progress.avg_actual,
            progress.avg_planned,
            ac_overrun_factor=self._ac_overrun_factor,
        )
        scores = compose_scores(evm.spi, evm.cpi, ledger.resource_coverage, self._weights)

        logger.info(
            "Computed schedule health for project %s: overall=%.1f spi=%.3f cpi=%.3f bac=%.2f",
            project_id,
            scores.overall_score,
            evm.spi,
            evm.cpi,
            evm.bac,
        )
        return ScheduleHealthMetrics.combine(now, evm, scores)

    def get_history(self, project_id: Any) -> List[ScheduleHealthSnapshot]:
        require_identity(self._user_session, operation_label="view schedule health history")
        pid = _require_project_id(project_id)
        return self._history.history(pid)

    def submit_snapshot(
        self,
        project_id: Any,
        fields: Mapping[str, Any],
        snapshot_date: date | str | None = None,
    ) -> ScheduleHealthSnapshot:
        """
        Store a caller-supplied snapshot without computing anything.

        Used for corrections and imports. The row is tagged MANUAL; if the day
        already has a snapshot, that existing row is returned unchanged.
        """
        principal = require_identity(self._user_session, operation_label="submit schedule health")
        pid = _require_project_id(project_id)
        day = _parse_date(snapshot_date) or date.today()
        values = _parse_manual_fields(fields)

        snapshot = ScheduleHealthSnapshot.create(
            project_id=pid,
            snapshot_date=day,
            source=SnapshotSource.MANUAL,
            **values,
        )
        if self._history.record(pid, snapshot, day):
            logger.info("Manual health snapshot for project %s on %s submitted by %s", pid, day, principal.username)
        else:
            logger.info("Manual health snapshot for project %s on %s skipped; day already recorded", pid, day)

        stored = self._history.get(pid, day)
        return stored if stored is not None else snapshot

    def describe_health(self, metrics: ScheduleHealthMetrics) -> HealthAssessment:
        return HealthAssessment(
            status=classify_health(metrics.overall_score),
            alerts=build_health_alerts(metrics),
        )

    # --------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------

    def _emit_write_failure(self, project_id: str, snapshot_date: date, exc: Exception) -> None:
        if self._support is None:
            return
        try:
            self._support.snapshot_write_failed(
                project_id=project_id,
                snapshot_date=snapshot_date,
                error_code=getattr(exc, "code", type(exc).__name__),
                message=f"Health snapshot for project {project_id} not stored: {exc}",
            )
        except OSError as support_exc:
            logger.warning("Could not write support event: %s", support_exc)


__all__ = ["ScheduleHealthService"]
