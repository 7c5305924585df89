"""Router for the scheduled flow health endpoint polled by external monitoring."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from flowhealth_runtime.app.api.models.flow_health import FlowHealthReport
from flowhealth_runtime.app.factory import create_adapters
from flowhealth_runtime.application.errors import InvalidEvaluationParameters, UpstreamDataError
from flowhealth_runtime.application.health_check import FlowHealthService
from flowhealth_runtime.domain.common.ids import CorrelationId, ScheduleId
from flowhealth_runtime.domain.flow_health.config import EvaluationParameters

logger = logging.getLogger(__name__)

router = APIRouter()


def get_flow_health_service() -> FlowHealthService:
    """Dependency to provide FlowHealthService."""
    schedule_repo, history_repo = create_adapters()
    return FlowHealthService(schedule_repo, history_repo)


@router.get("/flows/health", response_model=FlowHealthReport)
def get_flow_health(
    response: Response,
    limit: int | None = Query(None, description="Number of past successful runs to consider (default 30)"),
    percentage_from_average: float | None = Query(
        None,
        alias="percentageFromAverage",
        description="Slack on top of the max runtime, as a fraction of the average runtime (default 0.1)",
    ),
    schedule_id: str | None = Query(None, description="Only evaluate flows of this schedule"),
    service: FlowHealthService = Depends(get_flow_health_service),
) -> FlowHealthReport:
    """
    Evaluate the latest execution of every scheduled flow.

    Responds 200 when every flow is healthy and 503 otherwise, so a poller can
    alert on the status code alone.
    """
    try:
        params = EvaluationParameters.from_args(limit=limit, percentage_from_average=percentage_from_average)
    except InvalidEvaluationParameters as e:
        raise HTTPException(status_code=400, detail=str(e))

    correlation_id = CorrelationId(f"auto-{uuid.uuid4().hex[:8]}")
    try:
        result = service.check(
            params,
            schedule_id=ScheduleId(schedule_id) if schedule_id else None,
            correlation_id=correlation_id,
        )
    except UpstreamDataError as e:
        logger.error(f"Flow health check failed: {e}", extra={"correlation_id": correlation_id.value})
        raise HTTPException(status_code=502, detail=str(e))

    response.status_code = 200 if result.all_healthy else 503
    return FlowHealthReport.from_result(result, params)
