from __future__ import annotations

from typing import Iterable

from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.evaluator import evaluate_flow_health
from flowhealth_runtime.domain.flow_health.model import BatchHealthResult, FlowHistory


def evaluate_all(flows: Iterable[FlowHistory], params: EvaluationParameters) -> BatchHealthResult:
    """Evaluate every flow with the same ``params.now`` and fold the results into one status."""
    records = []
    for history in flows:
        record = evaluate_flow_health(
            history.flow,
            history.latest,
            history.recent_successes,
            params,
            next_check_ts=history.next_check_ts,
        )
        if record is not None:
            records.append(record)

    return BatchHealthResult(
        records=tuple(records),
        all_healthy=all(r.healthy for r in records),
        evaluated_at=params.now,
    )
