from __future__ import annotations

import logging
from datetime import timedelta

from flowhealth_runtime.domain.common.formatting import format_instant
from flowhealth_runtime.domain.flow_health import rules
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.model import ExecutionSample, RuntimeStatistics, ThresholdDecision
from flowhealth_runtime.domain.flow_health.statistics import round_half_up

logger = logging.getLogger(__name__)


def compute_deadline_ms(stats: RuntimeStatistics, tolerance_fraction: float) -> int:
    """Allowed run time: historical max plus a fraction of the historical average."""
    return stats.max_duration_ms + round_half_up(stats.average_duration_ms * tolerance_fraction)


def classify(
    latest: ExecutionSample, stats: RuntimeStatistics, params: EvaluationParameters
) -> ThresholdDecision:
    """
    Decide whether the latest execution of a flow is healthy.

    - Failed (severity above SUCCEEDED): unhealthy.
    - SUCCEEDED: healthy.
    - Anything still in progress is compared against
      ``start + max + round(average * tolerance_fraction)``; it turns unhealthy
      once ``now`` is strictly past that deadline. A run that never started is
      unhealthy; a deadline too far out to represent never expires.
    """
    if latest.status.is_definitively_failed():
        return ThresholdDecision(healthy=False)

    if latest.status.is_succeeded():
        return ThresholdDecision(healthy=True)

    if stats.max_duration_ms == 0 and params.zero_history_policy == rules.ZERO_HISTORY_HEALTHY:
        return ThresholdDecision(healthy=True, annotation=rules.ANNOTATION_NO_HISTORY)

    if latest.start_ts is None:
        logger.info(f"flow execution {latest.exec_id} is {latest.status.label} without a start time")
        return ThresholdDecision(healthy=False, annotation=rules.ANNOTATION_NOT_STARTED)

    try:
        deadline_ts = latest.start_ts + timedelta(
            milliseconds=compute_deadline_ms(stats, params.tolerance_fraction)
        )
    except OverflowError:
        # Slack beyond the representable range: the run can never be overdue.
        logger.info(f"flow execution {latest.exec_id} has no representable deadline")
        return ThresholdDecision(healthy=True, annotation=rules.ANNOTATION_NO_LIMIT)

    logger.info(
        f"flow execution {latest.exec_id} seems to be {latest.status.label}, "
        f"current time is {format_instant(params.now)}, max running time is {format_instant(deadline_ts)}"
    )

    if params.now > deadline_ts:
        return ThresholdDecision(
            healthy=False,
            annotation=rules.ANNOTATION_OUT_OF_LIMIT.format(deadline=format_instant(deadline_ts)),
            deadline_ts=deadline_ts,
        )
    return ThresholdDecision(
        healthy=True,
        annotation=rules.ANNOTATION_IN_LIMIT.format(deadline=format_instant(deadline_ts)),
        deadline_ts=deadline_ts,
    )
