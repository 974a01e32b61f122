# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Enum as SAEnum,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.domain import (
    ResourceType,
    SnapshotSource,
    TaskStatus,
)


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.TODO, nullable=False
    )
    actual_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
Index("idx_tasks_project_id", TaskORM.project_id)


class ResourceORM(Base):
    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    resource_type: Mapped[ResourceType] = mapped_column(
        SAEnum(ResourceType), default=ResourceType.LABOR, nullable=False
    )
    hourly_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    daily_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    capacity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
Index("idx_resources_project_id", ResourceORM.project_id)


class ResourceCostORM(Base):
    __tablename__ = "resource_costs"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    resource_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    quantity: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    unit_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
Index("idx_resource_costs_resource", ResourceCostORM.resource_id)


class ScheduleHealthSnapshotORM(Base):
    __tablename__ = "schedule_health_snapshots"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(String, nullable=False)
    snapshot_date: Mapped[date] = mapped_column(Date, nullable=False)
    source: Mapped[SnapshotSource] = mapped_column(
        SAEnum(SnapshotSource), default=SnapshotSource.COMPUTED, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    overall_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    schedule_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    resource_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    spi: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cpi: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    schedule_variance: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    cost_variance: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    bac: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    pv: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    ev: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    ac: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    eac: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    etc: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vac: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    tcpi: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

Index(
    "ux_health_project_date",
    ScheduleHealthSnapshotORM.project_id,
    ScheduleHealthSnapshotORM.snapshot_date,
    unique=True,
)
