from __future__ import annotations

import logging
from typing import List, Optional

from flowhealth_runtime.application.errors import UpstreamDataError
from flowhealth_runtime.domain.common.ids import CorrelationId, ScheduleId
from flowhealth_runtime.domain.flow_health.aggregator import evaluate_all
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.model import BatchHealthResult, FlowHistory, ScheduledFlow
from flowhealth_runtime.ports.execution_history_repository import ExecutionHistoryRepository
from flowhealth_runtime.ports.schedule_repository import ScheduleRepository

logger = logging.getLogger(__name__)


class FlowHealthService:
    """Collects schedule and history data for every scheduled flow and evaluates it as one batch."""

    def __init__(
        self,
        schedule_repo: ScheduleRepository,
        history_repo: ExecutionHistoryRepository,
    ) -> None:
        self.schedule_repo = schedule_repo
        self.history_repo = history_repo

    def _log_extra(self, correlation_id: Optional[CorrelationId]) -> dict[str, str]:
        return {"correlation_id": correlation_id.value} if correlation_id else {}

    def _load_history(
        self, scheduled: ScheduledFlow, params: EvaluationParameters, extra: dict[str, str]
    ) -> FlowHistory:
        flow = scheduled.flow
        try:
            latest = self.history_repo.fetch_latest_execution(flow)
            logger.info(
                f"got {0 if latest is None else 1} flows for flow id '{flow.flow_name}' "
                f"and project id '{flow.project_id}'",
                extra=extra,
            )
            if latest is None:
                return FlowHistory(flow=flow, latest=None, next_check_ts=scheduled.next_check_ts)

            successes = self.history_repo.fetch_recent_successes(flow, params.history_limit)
            logger.info(
                f"got {len(successes)} succeeded flows for flow id '{flow.flow_name}' "
                f"and project id '{flow.project_id}'",
                extra=extra,
            )
        except Exception as e:
            raise UpstreamDataError(f"Could not fetch execution history for flow {flow}: {e}", flow=flow) from e

        return FlowHistory(
            flow=flow,
            latest=latest,
            recent_successes=tuple(successes),
            next_check_ts=scheduled.next_check_ts,
        )

    def check(
        self,
        params: EvaluationParameters,
        schedule_id: Optional[ScheduleId] = None,
        correlation_id: Optional[CorrelationId] = None,
    ) -> BatchHealthResult:
        """
        Evaluate every scheduled flow.

        ``params.now`` is the single time snapshot used for every flow in the
        batch. Any upstream failure aborts the whole batch with
        ``UpstreamDataError``.
        """
        extra = self._log_extra(correlation_id)
        try:
            scheduled_flows: List[ScheduledFlow] = list(self.schedule_repo.list_scheduled_flows(schedule_id))
        except Exception as e:
            raise UpstreamDataError(f"Could not fetch scheduled flows: {e}") from e

        logger.debug(f"found {len(scheduled_flows)} scheduled flows", extra=extra)
        histories = [self._load_history(scheduled, params, extra) for scheduled in scheduled_flows]

        result = evaluate_all(histories, params)
        unhealthy = [r.flow_name for r in result.records if not r.healthy]
        if unhealthy:
            logger.warning(f"{len(unhealthy)} of {len(result.records)} flows unhealthy: {', '.join(unhealthy)}", extra=extra)
        else:
            logger.info(f"all {len(result.records)} evaluated flows healthy", extra=extra)
        return result
