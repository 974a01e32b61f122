from __future__ import annotations

from core.domain import Task
from infra.db.models import TaskORM


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        project_id=task.project_id,
        name=task.name,
        start_date=task.start_date,
        end_date=task.end_date,
        progress=task.progress,
        status=task.status,
        actual_end=task.actual_end,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        start_date=obj.start_date,
        end_date=obj.end_date,
        progress=obj.progress if obj.progress is not None else 0.0,
        status=obj.status,
        actual_end=obj.actual_end,
    )


__all__ = ["task_to_orm", "task_from_orm"]
