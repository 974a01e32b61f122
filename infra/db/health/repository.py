from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from core.domain import ScheduleHealthSnapshot
from core.exceptions import PersistenceWriteError
from core.interfaces import HealthSnapshotRepository
from infra.db.health.mapper import snapshot_from_orm, snapshot_to_values
from infra.db.models import ScheduleHealthSnapshotORM

_CONFLICT_KEY = ["project_id", "snapshot_date"]
_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlAlchemyHealthSnapshotRepository(HealthSnapshotRepository):
    def __init__(self, session: Session):
        self.session = session

    def try_insert(
        self,
        project_id: str,
        snapshot_date: date,
        snapshot: ScheduleHealthSnapshot,
    ) -> bool:
        values = snapshot_to_values(snapshot)
        values["project_id"] = project_id
        values["snapshot_date"] = snapshot_date

        dialect = self.session.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise PersistenceWriteError(
                f"Insert-or-skip is not supported for dialect '{dialect}'.",
                code="UNSUPPORTED_DIALECT",
            )

        stmt = (
            insert(ScheduleHealthSnapshotORM)
            .values(**values)
            .on_conflict_do_nothing(index_elements=_CONFLICT_KEY)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def recent(self, project_id: str, limit: int = 30) -> List[ScheduleHealthSnapshot]:
        stmt = (
            select(ScheduleHealthSnapshotORM)
            .where(ScheduleHealthSnapshotORM.project_id == project_id)
            .order_by(ScheduleHealthSnapshotORM.snapshot_date.desc())
            .limit(limit)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [snapshot_from_orm(row) for row in reversed(rows)]

    def get(self, project_id: str, snapshot_date: date) -> Optional[ScheduleHealthSnapshot]:
        stmt = select(ScheduleHealthSnapshotORM).where(
            ScheduleHealthSnapshotORM.project_id == project_id,
            ScheduleHealthSnapshotORM.snapshot_date == snapshot_date,
        )
        obj = self.session.execute(stmt).scalars().first()
        return snapshot_from_orm(obj) if obj else None


__all__ = ["SqlAlchemyHealthSnapshotRepository"]
