from .evm import compute_evm
from .history import HistoryRecorder
from .ledger import CostLedgerAggregator
from .models import (
    EvmMetrics,
    HealthAssessment,
    HealthScores,
    HealthScoreWeights,
    LedgerSummary,
    ScheduleHealthMetrics,
    TaskProgressSummary,
)
from .progress import TaskProgressAggregator, actual_fraction, planned_fraction, summarize_progress
from .scoring import build_health_alerts, classify_health, compose_scores
from .service import ScheduleHealthService

__all__ = [
    "ScheduleHealthService",
    "TaskProgressAggregator",
    "CostLedgerAggregator",
    "HistoryRecorder",
    "compute_evm",
    "compose_scores",
    "classify_health",
    "build_health_alerts",
    "actual_fraction",
    "planned_fraction",
    "summarize_progress",
    "EvmMetrics",
    "HealthAssessment",
    "HealthScores",
    "HealthScoreWeights",
    "LedgerSummary",
    "ScheduleHealthMetrics",
    "TaskProgressSummary",
]
