from __future__ import annotations

from typing import Tuple

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from core.interfaces import ResourceCostRepository
from infra.db.models import ResourceCostORM, ResourceORM


class SqlAlchemyResourceCostRepository(ResourceCostRepository):
    def __init__(self, session: Session):
        self.session = session

    def sum_by_project(self, project_id: str) -> float:
        stmt = (
            select(func.coalesce(func.sum(ResourceCostORM.total_cost), 0.0))
            .join(ResourceORM, ResourceORM.id == ResourceCostORM.resource_id)
            .where(ResourceORM.project_id == project_id)
        )
        return float(self.session.execute(stmt).scalar_one() or 0.0)

    def resource_coverage(self, project_id: str) -> Tuple[int, int]:
        total_stmt = select(func.count(ResourceORM.id)).where(ResourceORM.project_id == project_id)
        covered_stmt = (
            select(func.count(distinct(ResourceCostORM.resource_id)))
            .join(ResourceORM, ResourceORM.id == ResourceCostORM.resource_id)
            .where(ResourceORM.project_id == project_id)
        )
        total = int(self.session.execute(total_stmt).scalar_one() or 0)
        covered = int(self.session.execute(covered_stmt).scalar_one() or 0)
        return total, covered


__all__ = ["SqlAlchemyResourceCostRepository"]
