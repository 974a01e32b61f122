from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.domain import ScheduleHealthSnapshot
from core.exceptions import CollaboratorReadError, PersistenceWriteError
from core.interfaces import HealthSnapshotRepository
from core.services.common.base import ServiceBase
from core.services.health.policy import HISTORY_LIMIT

logger = logging.getLogger(__name__)


class HistoryRecorder(ServiceBase):
    """
    Append-only daily series of health snapshots.

    At most one row exists per (project, day); a second write for the same day
    is skipped and reported as False rather than raised.
    """

    def __init__(self, session: Session, snapshot_repo: HealthSnapshotRepository):
        super().__init__(session)
        self._snapshot_repo: HealthSnapshotRepository = snapshot_repo

    def record(
        self,
        project_id: str,
        snapshot: ScheduleHealthSnapshot,
        snapshot_date: date,
    ) -> bool:
        try:
            inserted = self._snapshot_repo.try_insert(project_id, snapshot_date, snapshot)
            self.commit()
        except SQLAlchemyError as exc:
            self.rollback()
            raise PersistenceWriteError(
                f"Could not store health snapshot for {snapshot_date.isoformat()}.",
                code="SNAPSHOT_WRITE_FAILED",
            ) from exc

        if inserted:
            logger.info(
                "Stored %s health snapshot for project %s on %s",
                snapshot.source.value.lower(),
                project_id,
                snapshot_date.isoformat(),
            )
        else:
            logger.debug(
                "Health snapshot for project %s on %s already exists; skipped",
                project_id,
                snapshot_date.isoformat(),
            )
        return inserted

    def history(self, project_id: str, limit: int = HISTORY_LIMIT) -> List[ScheduleHealthSnapshot]:
        try:
            return self._snapshot_repo.recent(project_id, limit=limit)
        except SQLAlchemyError as exc:
            self.rollback()
            raise CollaboratorReadError(
                "Could not read health history.", code="HISTORY_READ_FAILED"
            ) from exc

    def get(self, project_id: str, snapshot_date: date) -> Optional[ScheduleHealthSnapshot]:
        try:
            return self._snapshot_repo.get(project_id, snapshot_date)
        except SQLAlchemyError as exc:
            self.rollback()
            raise CollaboratorReadError(
                "Could not read health snapshot.", code="HISTORY_READ_FAILED"
            ) from exc


__all__ = ["HistoryRecorder"]
