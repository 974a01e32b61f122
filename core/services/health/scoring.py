from __future__ import annotations

from typing import List

from core.domain import HealthStatus
from core.services.health.models import HealthScores, HealthScoreWeights, ScheduleHealthMetrics
from core.services.health.policy import DEFAULT_WEIGHTS


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def compose_scores(
    spi: float,
    cpi: float,
    resource_coverage: float,
    weights: HealthScoreWeights = DEFAULT_WEIGHTS,
) -> HealthScores:
    schedule_score = _clamp_score(spi * 100.0)
    cost_score = _clamp_score(cpi * 100.0)
    resource_score = _clamp_score(resource_coverage * 100.0)
    overall = (
        weights.schedule * schedule_score
        + weights.cost * cost_score
        + weights.resource * resource_score
    )
    return HealthScores(
        schedule_score=schedule_score,
        cost_score=cost_score,
        resource_score=resource_score,
        overall_score=round(overall, 1),
    )


def classify_health(score: float) -> HealthStatus:
    if score >= 80:
        return HealthStatus.EXCELLENT
    if score >= 60:
        return HealthStatus.GOOD
    if score >= 40:
        return HealthStatus.FAIR
    if score >= 20:
        return HealthStatus.POOR
    return HealthStatus.CRITICAL


def build_health_alerts(metrics: ScheduleHealthMetrics) -> List[str]:
    alerts: List[str] = []

    if metrics.pv > 0 and metrics.spi < 0.8:
        alerts.append(f"Critical schedule delay: SPI is {metrics.spi:.2f}, project is significantly behind schedule.")
    if metrics.ac > 0 and metrics.cpi < 0.9:
        alerts.append(f"Budget overrun risk: CPI is {metrics.cpi:.2f}, cost performance needs attention.")
    if metrics.resource_score < 50:
        alerts.append(
            f"Resource cost data is incomplete: resource score is {metrics.resource_score:.0f}."
        )
    if metrics.overall_score < 20:
        alerts.append(
            f"Project health critical: overall score is {metrics.overall_score:.1f}, multiple areas need attention."
        )
    if metrics.cost_variance < 0:
        alerts.append(f"Cost variance is {metrics.cost_variance:,.0f}: project is over budget.")
    if metrics.schedule_variance < 0:
        alerts.append(f"Schedule variance is {metrics.schedule_variance:,.0f}: less work done than planned.")
    if metrics.vac < 0:
        alerts.append(f"Forecast: likely over budget at completion (VAC {metrics.vac:,.0f}).")
    if metrics.tcpi > 1.1:
        alerts.append(f"TCPI is {metrics.tcpi:.2f}: hitting the budget requires a significant efficiency gain.")

    return alerts


__all__ = ["compose_scores", "classify_health", "build_health_alerts"]
