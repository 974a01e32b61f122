from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import TaskStatus
from core.domain.identifiers import generate_id


@dataclass
class Task:
    id: str
    project_id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: float = 0.0
    status: TaskStatus = TaskStatus.TODO
    actual_end: Optional[date] = None

    @staticmethod
    def create(project_id: str, name: str, **extra) -> "Task":
        return Task(
            id=generate_id(),
            project_id=project_id,
            name=name,
            **extra,
        )


__all__ = ["Task"]
