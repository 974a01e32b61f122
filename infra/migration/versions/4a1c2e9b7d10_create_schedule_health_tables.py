"""create schedule health tables

Revision ID: 4a1c2e9b7d10
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


revision = "4a1c2e9b7d10"
down_revision = None
branch_labels = None
depends_on = None

_TASK_STATUS = sa.Enum("TODO", "IN_PROGRESS", "BLOCKED", "DONE", name="taskstatus")
_RESOURCE_TYPE = sa.Enum("LABOR", "EQUIPMENT", "MATERIAL", name="resourcetype")
_SNAPSHOT_SOURCE = sa.Enum("COMPUTED", "MANUAL", name="snapshotsource")
_METRIC_COLUMNS = (
    "overall_score",
    "schedule_score",
    "cost_score",
    "resource_score",
    "spi",
    "cpi",
    "schedule_variance",
    "cost_variance",
    "bac",
    "pv",
    "ev",
    "ac",
    "eac",
    "etc",
    "vac",
    "tcpi",
)


def upgrade() -> None:
    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("progress", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("status", _TASK_STATUS, nullable=False, server_default=sa.text("'TODO'")),
        sa.Column("actual_end", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_project_id", "tasks", ["project_id"], unique=False)

    op.create_table(
        "resources",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("resource_type", _RESOURCE_TYPE, nullable=False, server_default=sa.text("'LABOR'")),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("daily_rate", sa.Float(), nullable=True),
        sa.Column("capacity", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_resources_project_id", "resources", ["project_id"], unique=False)

    op.create_table(
        "resource_costs",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("resource_id", sa.String(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("quantity", sa.Float(), nullable=True),
        sa.Column("unit_cost", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_cost", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_resource_costs_resource", "resource_costs", ["resource_id"], unique=False)

    op.create_table(
        "schedule_health_snapshots",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("snapshot_date", sa.Date(), nullable=False),
        sa.Column("source", _SNAPSHOT_SOURCE, nullable=False, server_default=sa.text("'COMPUTED'")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        *[
            sa.Column(name, sa.Float(), nullable=False, server_default=sa.text("0"))
            for name in _METRIC_COLUMNS
        ],
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ux_health_project_date",
        "schedule_health_snapshots",
        ["project_id", "snapshot_date"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ux_health_project_date", table_name="schedule_health_snapshots")
    op.drop_table("schedule_health_snapshots")
    op.drop_index("idx_resource_costs_resource", table_name="resource_costs")
    op.drop_table("resource_costs")
    op.drop_index("idx_resources_project_id", table_name="resources")
    op.drop_table("resources")
    op.drop_index("idx_tasks_project_id", table_name="tasks")
    op.drop_table("tasks")
