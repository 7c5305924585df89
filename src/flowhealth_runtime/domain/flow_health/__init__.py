from __future__ import annotations

from flowhealth_runtime.domain.flow_health.aggregator import evaluate_all
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.evaluator import evaluate_flow_health
from flowhealth_runtime.domain.flow_health.model import (
    BatchHealthResult,
    ExecutionSample,
    FlowHealthRecord,
    FlowHistory,
    RuntimeStatistics,
    ScheduledFlow,
    ThresholdDecision,
)
from flowhealth_runtime.domain.flow_health.policy import classify
from flowhealth_runtime.domain.flow_health.statistics import compute_statistics
from flowhealth_runtime.domain.flow_health import rules

__all__ = [
    "BatchHealthResult",
    "EvaluationParameters",
    "ExecutionSample",
    "FlowHealthRecord",
    "FlowHistory",
    "RuntimeStatistics",
    "ScheduledFlow",
    "ThresholdDecision",
    "classify",
    "compute_statistics",
    "evaluate_all",
    "evaluate_flow_health",
    "rules",
]
