"""Pydantic models for the flow health report."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from flowhealth_runtime.domain.flow_health.config import EvaluationParameters
from flowhealth_runtime.domain.flow_health.model import BatchHealthResult, FlowHealthRecord


class FlowHealthItem(BaseModel):
    """One row of the report: the latest execution of a scheduled flow."""

    flow_name: str
    project_id: int
    start_time: str = Field(..., description="yyyy-MM-dd HH:mm:ss, empty when not started")
    end_time: str = Field(..., description="yyyy-MM-dd HH:mm:ss, empty when not finished")
    last_succeeded_runtime: str
    average_succeeded_runtime: str
    max_succeeded_runtime: str
    next_execution_time: str = Field(..., description="Next scheduled check, or 'undefined'")
    status: str = Field(..., description="Lower-case status, annotated with the runtime limit while running")
    status_color: str = Field(..., description="green | red")
    healthy: bool
    last_succeeded_runtime_ms: int
    average_succeeded_runtime_ms: int
    max_succeeded_runtime_ms: int
    deadline: datetime | None = None

    @classmethod
    def from_record(cls, record: FlowHealthRecord) -> "FlowHealthItem":
        return cls(
            flow_name=record.flow_name,
            project_id=record.project_id,
            start_time=record.start_time,
            end_time=record.end_time,
            last_succeeded_runtime=record.last_succeeded_runtime,
            average_succeeded_runtime=record.average_succeeded_runtime,
            max_succeeded_runtime=record.max_succeeded_runtime,
            next_execution_time=record.next_execution_time,
            status=record.status,
            status_color=record.status_color,
            healthy=record.healthy,
            last_succeeded_runtime_ms=record.statistics.last_duration_ms,
            average_succeeded_runtime_ms=record.statistics.average_duration_ms,
            max_succeeded_runtime_ms=record.statistics.max_duration_ms,
            deadline=record.deadline_ts,
        )


class FlowHealthReport(BaseModel):
    """Health of all scheduled flows; ``all_healthy`` drives the HTTP status code."""

    all_healthy: bool
    evaluated_at: datetime
    history_limit: int
    tolerance_fraction: float
    flows: list[FlowHealthItem] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: BatchHealthResult, params: EvaluationParameters) -> "FlowHealthReport":
        return cls(
            all_healthy=result.all_healthy,
            evaluated_at=result.evaluated_at,
            history_limit=params.history_limit,
            tolerance_fraction=params.tolerance_fraction,
            flows=[FlowHealthItem.from_record(r) for r in result.records],
        )
