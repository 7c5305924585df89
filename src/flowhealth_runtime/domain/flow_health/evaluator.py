from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from flowhealth_runtime.domain.common.formatting import format_duration, format_instant
from flowhealth_runtime.domain.common.ids import FlowRef
from flowhealth_runtime.domain.flow_health import rules
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.model import ExecutionSample, FlowHealthRecord, ThresholdDecision
from flowhealth_runtime.domain.flow_health.policy import classify
from flowhealth_runtime.domain.flow_health.statistics import compute_statistics


def _status_label(latest: ExecutionSample, decision: ThresholdDecision) -> str:
    if decision.annotation:
        return f"{latest.status.label} ({decision.annotation})"
    return latest.status.label


def _next_execution_time(next_check_ts: Optional[datetime]) -> str:
    if next_check_ts is None:
        return rules.NEXT_EXECUTION_UNDEFINED
    return format_instant(next_check_ts)


def evaluate_flow_health(
    flow: FlowRef,
    latest: Optional[ExecutionSample],
    recent_successes: Sequence[ExecutionSample],
    params: EvaluationParameters,
    next_check_ts: Optional[datetime] = None,
) -> Optional[FlowHealthRecord]:
    """
    Evaluate one flow's latest execution against its own successful history.

    Returns None when the flow has never run. ``recent_successes`` must be
    ordered most-recent-first and is cut to ``params.history_limit`` entries.
    """
    if latest is None:
        return None

    stats = compute_statistics(list(recent_successes)[: params.history_limit])
    decision = classify(latest, stats, params)

    return FlowHealthRecord(
        flow_name=flow.flow_name,
        project_id=flow.project_id,
        start_time=format_instant(latest.start_ts),
        end_time=format_instant(latest.end_ts),
        last_succeeded_runtime=format_duration(stats.last_duration_ms),
        average_succeeded_runtime=format_duration(stats.average_duration_ms),
        max_succeeded_runtime=format_duration(stats.max_duration_ms),
        next_execution_time=_next_execution_time(next_check_ts),
        status=_status_label(latest, decision),
        status_color=rules.COLOR_GREEN if decision.healthy else rules.COLOR_RED,
        healthy=decision.healthy,
        statistics=stats,
        deadline_ts=decision.deadline_ts,
    )
