from __future__ import annotations

from core.domain import Resource, ResourceCost
from infra.db.models import ResourceCostORM, ResourceORM


def resource_to_orm(resource: Resource) -> ResourceORM:
    return ResourceORM(
        id=resource.id,
        project_id=resource.project_id,
        name=resource.name,
        resource_type=resource.resource_type,
        hourly_rate=resource.hourly_rate,
        daily_rate=resource.daily_rate,
        capacity=resource.capacity,
    )


def resource_from_orm(obj: ResourceORM) -> Resource:
    return Resource(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        resource_type=obj.resource_type,
        hourly_rate=obj.hourly_rate,
        daily_rate=obj.daily_rate,
        capacity=obj.capacity,
    )


def resource_cost_to_orm(cost: ResourceCost) -> ResourceCostORM:
    return ResourceCostORM(
        id=cost.id,
        resource_id=cost.resource_id,
        date=cost.date,
        quantity=cost.quantity,
        unit_cost=cost.unit_cost,
        total_cost=cost.total_cost,
    )


def resource_cost_from_orm(obj: ResourceCostORM) -> ResourceCost:
    return ResourceCost(
        id=obj.id,
        resource_id=obj.resource_id,
        date=obj.date,
        quantity=obj.quantity,
        unit_cost=obj.unit_cost,
        total_cost=obj.total_cost,
    )


__all__ = [
    "resource_to_orm",
    "resource_from_orm",
    "resource_cost_to_orm",
    "resource_cost_from_orm",
]
