from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.auth.session import UserSessionContext
from core.services.health import ScheduleHealthService
from core.services.health.policy import load_ac_overrun_factor, load_health_weights
from infra.db.repositories import (
    SqlAlchemyHealthSnapshotRepository,
    SqlAlchemyResourceCostRepository,
    SqlAlchemyTaskRepository,
)
from infra.operational_support import OperationalSupport, get_operational_support


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    user_session: UserSessionContext
    support: OperationalSupport
    health_service: ScheduleHealthService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "user_session": self.user_session,
            "support": self.support,
            "health_service": self.health_service,
        }


def build_service_graph(
    session: Session,
    user_session: UserSessionContext | None = None,
    support: OperationalSupport | None = None,
) -> ServiceGraph:
    user_session = user_session or UserSessionContext()
    support = support or get_operational_support()

    task_repo = SqlAlchemyTaskRepository(session)
    cost_repo = SqlAlchemyResourceCostRepository(session)
    snapshot_repo = SqlAlchemyHealthSnapshotRepository(session)

    health_service = ScheduleHealthService(
        session,
        task_repo,
        cost_repo,
        snapshot_repo,
        user_session=user_session,
        weights=load_health_weights(),
        ac_overrun_factor=load_ac_overrun_factor(),
        support=support,
    )

    return ServiceGraph(
        session=session,
        user_session=user_session,
        support=support,
        health_service=health_service,
    )


__all__ = ["ServiceGraph", "build_service_graph"]
