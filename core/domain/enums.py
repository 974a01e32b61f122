from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    DONE = "DONE"


class ResourceType(str, Enum):
    LABOR = "LABOR"
    EQUIPMENT = "EQUIPMENT"
    MATERIAL = "MATERIAL"


class SnapshotSource(str, Enum):
    COMPUTED = "COMPUTED"
    MANUAL = "MANUAL"


class HealthStatus(str, Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"
    CRITICAL = "CRITICAL"


__all__ = ["TaskStatus", "ResourceType", "SnapshotSource", "HealthStatus"]
