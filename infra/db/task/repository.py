from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.domain import Task
from core.interfaces import TaskRepository
from infra.db.models import TaskORM
from infra.db.task.mapper import task_from_orm


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = select(TaskORM).where(TaskORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyTaskRepository"]
