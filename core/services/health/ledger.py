from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import CollaboratorReadError
from core.interfaces import ResourceCostRepository
from core.services.health.models import LedgerSummary

logger = logging.getLogger(__name__)


class CostLedgerAggregator:
    """Reduces a project's resource cost entries to its budget baseline (BAC)."""

    def __init__(self, cost_repo: ResourceCostRepository):
        self._cost_repo: ResourceCostRepository = cost_repo

    def aggregate(self, project_id: str) -> LedgerSummary:
        try:
            total = float(self._cost_repo.sum_by_project(project_id) or 0.0)
            total_resources, covered = self._cost_repo.resource_coverage(project_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to read cost ledger for project %s: %s", project_id, exc)
            raise CollaboratorReadError(
                "Could not read project cost ledger.", code="COST_READ_FAILED"
            ) from exc

        if total < 0:
            logger.warning("Cost ledger for project %s sums to %.2f; using 0.", project_id, total)
            total = 0.0

        return LedgerSummary(
            bac=total,
            total_resources=int(total_resources or 0),
            resources_with_costs=int(covered or 0),
        )


__all__ = ["CostLedgerAggregator"]
