# infra/db/repositories.py
from infra.db.health import SqlAlchemyHealthSnapshotRepository
from infra.db.resource import SqlAlchemyResourceCostRepository
from infra.db.task import SqlAlchemyTaskRepository

__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyResourceCostRepository",
    "SqlAlchemyHealthSnapshotRepository",
]
