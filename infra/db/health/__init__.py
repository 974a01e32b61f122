from infra.db.health.mapper import snapshot_from_orm, snapshot_to_values
from infra.db.health.repository import SqlAlchemyHealthSnapshotRepository

__all__ = [
    "snapshot_to_values",
    "snapshot_from_orm",
    "SqlAlchemyHealthSnapshotRepository",
]
