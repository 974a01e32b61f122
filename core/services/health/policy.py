from __future__ import annotations

import math
import os

from core.exceptions import ValidationError
from core.services.health.models import HealthScoreWeights

DEFAULT_WEIGHTS = HealthScoreWeights()
DEFAULT_AC_OVERRUN_FACTOR = 1.1
HISTORY_LIMIT = 30


def validate_weights(weights: HealthScoreWeights) -> HealthScoreWeights:
    parts = (weights.schedule, weights.cost, weights.resource)
    if any(not math.isfinite(w) or w < 0 for w in parts):
        raise ValidationError("Health score weights must be non-negative numbers.", code="INVALID_WEIGHTS")
    if not math.isclose(sum(parts), 1.0, abs_tol=1e-9):
        raise ValidationError("Health score weights must sum to 1.", code="INVALID_WEIGHTS")
    return weights


def load_health_weights() -> HealthScoreWeights:
    raw = (os.getenv("SCHEDULE_HEALTH_WEIGHTS", "") or "").strip()
    if not raw:
        return DEFAULT_WEIGHTS
    items = [item.strip() for item in raw.split(",")]
    if len(items) != 3:
        raise ValidationError(
            "SCHEDULE_HEALTH_WEIGHTS must be 'schedule,cost,resource'.",
            code="INVALID_WEIGHTS",
        )
    try:
        schedule, cost, resource = (float(item) for item in items)
    except ValueError as exc:
        raise ValidationError(f"Invalid SCHEDULE_HEALTH_WEIGHTS value: {raw!r}", code="INVALID_WEIGHTS") from exc
    return validate_weights(HealthScoreWeights(schedule=schedule, cost=cost, resource=resource))


def load_ac_overrun_factor() -> float:
    raw = (os.getenv("SCHEDULE_HEALTH_AC_FACTOR", "") or "").strip()
    if not raw:
        return DEFAULT_AC_OVERRUN_FACTOR
    try:
        factor = float(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid SCHEDULE_HEALTH_AC_FACTOR value: {raw!r}", code="INVALID_AC_FACTOR") from exc
    if not math.isfinite(factor) or factor < 0:
        raise ValidationError("SCHEDULE_HEALTH_AC_FACTOR must be a non-negative number.", code="INVALID_AC_FACTOR")
    return factor


__all__ = [
    "DEFAULT_WEIGHTS",
    "DEFAULT_AC_OVERRUN_FACTOR",
    "HISTORY_LIMIT",
    "validate_weights",
    "load_health_weights",
    "load_ac_overrun_factor",
]
