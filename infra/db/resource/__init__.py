from infra.db.resource.mapper import (
    resource_cost_from_orm,
    resource_cost_to_orm,
    resource_from_orm,
    resource_to_orm,
)
from infra.db.resource.repository import SqlAlchemyResourceCostRepository

__all__ = [
    "resource_to_orm",
    "resource_from_orm",
    "resource_cost_to_orm",
    "resource_cost_from_orm",
    "SqlAlchemyResourceCostRepository",
]
