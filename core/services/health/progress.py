from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from core.domain import Task
from core.exceptions import CollaboratorReadError
from core.interfaces import TaskRepository
from core.services.health.models import TaskProgressSummary

logger = logging.getLogger(__name__)


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def _as_datetime(value: date, tzinfo=None) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time(), tzinfo=tzinfo)


def actual_fraction(task: Task) -> float:
    return _clamp01(float(task.progress or 0.0) / 100.0)


def planned_fraction(task: Task, now: datetime) -> float:
    """
    Share of the task that should be done at `now`, from its start/end dates.

    Tasks without a full schedule count as fully due.
    """
    if task.start_date is None or task.end_date is None:
        return 1.0

    start = _as_datetime(task.start_date, now.tzinfo)
    end = _as_datetime(task.end_date, now.tzinfo)

    if now >= end:
        return 1.0
    if now < start:
        return 0.0
    if start == end:
        return 1.0

    span = (end - start).total_seconds()
    return _clamp01((now - start).total_seconds() / span)


def summarize_progress(tasks: Iterable[Task], now: datetime) -> TaskProgressSummary:
    count = 0
    actual_total = 0.0
    planned_total = 0.0
    for task in tasks:
        count += 1
        actual_total += actual_fraction(task)
        planned_total += planned_fraction(task, now)

    if count == 0:
        return TaskProgressSummary(task_count=0, avg_actual=0.0, avg_planned=0.0)
    return TaskProgressSummary(
        task_count=count,
        avg_actual=actual_total / count,
        avg_planned=planned_total / count,
    )


class TaskProgressAggregator:
    def __init__(self, task_repo: TaskRepository):
        self._task_repo: TaskRepository = task_repo

    def aggregate(self, project_id: str, now: Optional[datetime] = None) -> TaskProgressSummary:
        now = now or datetime.now()
        try:
            tasks = self._task_repo.list_by_project(project_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to read tasks for project %s: %s", project_id, exc)
            raise CollaboratorReadError(
                "Could not read project tasks.", code="TASK_READ_FAILED"
            ) from exc

        summary = summarize_progress(tasks, now)
        logger.debug(
            "Project %s progress: %d tasks, actual=%.4f planned=%.4f",
            project_id,
            summary.task_count,
            summary.avg_actual,
            summary.avg_planned,
        )
        return summary


__all__ = [
    "actual_fraction",
    "planned_fraction",
    "summarize_progress",
    "TaskProgressAggregator",
]
