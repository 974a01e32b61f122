# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Tuple

from core.domain import ScheduleHealthSnapshot, Task


class TaskRepository(ABC):
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Task]: ...


class ResourceCostRepository(ABC):
    @abstractmethod
    def sum_by_project(self, project_id: str) -> float: ...

    @abstractmethod
    def resource_coverage(self, project_id: str) -> Tuple[int, int]:
        """Return (total_resources, resources_with_cost_entries) for a project."""


class HealthSnapshotRepository(ABC):
    @abstractmethod
    def try_insert(
        self,
        project_id: str,
        snapshot_date: date,
        snapshot: ScheduleHealthSnapshot,
    ) -> bool:
        """Insert the snapshot unless one exists for (project_id, snapshot_date).

        Returns True when a row was written, False when the key was taken.
        """

    @abstractmethod
    def recent(self, project_id: str, limit: int = 30) -> List[ScheduleHealthSnapshot]:
        """Return up to `limit` most recent snapshots, ascending by date."""

    @abstractmethod
    def get(self, project_id: str, snapshot_date: date) -> Optional[ScheduleHealthSnapshot]: ...
