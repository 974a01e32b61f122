# tests/conftest.py
import os

os.environ.setdefault("SCHEDULE_HEALTH_DB_URL", "sqlite:///:memory:")

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.domain import Resource, ResourceCost, ResourceType, Task
from core.services.auth.session import UserSessionContext, UserSessionPrincipal
from infra.db.base import Base
from infra.db.resource import resource_cost_to_orm, resource_to_orm
from infra.db.task import task_to_orm
from infra.operational_support import OperationalSupport
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def user_session():
    return UserSessionContext(
        UserSessionPrincipal(user_id="u-1", username="planner", display_name="Site Planner")
    )


@pytest.fixture
def support(tmp_path):
    return OperationalSupport(events_path=tmp_path / "support-events.jsonl")


@pytest.fixture
def services(session, user_session, support):
    graph = build_service_graph(session, user_session=user_session, support=support)
    return graph.as_dict()


class Seeder:
    def __init__(self, session):
        self.session = session

    def task(self, project_id: str, name: str, **extra) -> Task:
        task = Task.create(project_id, name, **extra)
        self.session.add(task_to_orm(task))
        self.session.commit()
        return task

    def resource(
        self,
        project_id: str,
        name: str,
        resource_type: ResourceType = ResourceType.LABOR,
    ) -> Resource:
        resource = Resource.create(project_id, name, resource_type=resource_type)
        self.session.add(resource_to_orm(resource))
        self.session.commit()
        return resource

    def cost(
        self,
        resource_id: str,
        total_cost: float,
        cost_date: date = date(2024, 6, 1),
        quantity: float | None = None,
    ) -> ResourceCost:
        unit_cost = total_cost / quantity if quantity else total_cost
        cost = ResourceCost.create(resource_id, cost_date, unit_cost, total_cost, quantity=quantity)
        self.session.add(resource_cost_to_orm(cost))
        self.session.commit()
        return cost


@pytest.fixture
def seed(session):
    return Seeder(session)
