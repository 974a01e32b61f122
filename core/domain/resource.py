from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.domain.enums import ResourceType
from core.domain.identifiers import generate_id


@dataclass
class Resource:
    id: str
    project_id: str
    name: str
    resource_type: ResourceType = ResourceType.LABOR
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None
    capacity: Optional[float] = None

    @staticmethod
    def create(
        project_id: str,
        name: str,
        resource_type: ResourceType = ResourceType.LABOR,
        hourly_rate: Optional[float] = None,
        daily_rate: Optional[float] = None,
        capacity: Optional[float] = None,
    ) -> "Resource":
        return Resource(
            id=generate_id(),
            project_id=project_id,
            name=name,
            resource_type=resource_type,
            hourly_rate=hourly_rate,
            daily_rate=daily_rate,
            capacity=capacity,
        )


@dataclass
class ResourceCost:
    id: str
    resource_id: str
    date: date
    unit_cost: float
    total_cost: float
    quantity: Optional[float] = None

    @staticmethod
    def create(
        resource_id: str,
        cost_date: date,
        unit_cost: float,
        total_cost: float,
        quantity: Optional[float] = None,
    ) -> "ResourceCost":
        return ResourceCost(
            id=generate_id(),
            resource_id=resource_id,
            date=cost_date,
            unit_cost=unit_cost,
            total_cost=total_cost,
            quantity=quantity,
        )


__all__ = ["Resource", "ResourceCost"]
