from core.domain.enums import HealthStatus, ResourceType, SnapshotSource, TaskStatus
from core.domain.health import METRIC_FIELDS, ScheduleHealthSnapshot
from core.domain.identifiers import generate_id
from core.domain.resource import Resource, ResourceCost
from core.domain.task import Task

__all__ = [
    "generate_id",
    "TaskStatus",
    "ResourceType",
    "SnapshotSource",
    "HealthStatus",
    "Task",
    "Resource",
    "ResourceCost",
    "METRIC_FIELDS",
    "ScheduleHealthSnapshot",
]
