from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Tuple, Union

from flowhealth_runtime.domain.common.ids import FlowRef, ProjectId
from flowhealth_runtime.domain.common.status import Status

_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class ExecutionSample:
    status: Status
    start_ts: Optional[datetime]
    end_ts: Optional[datetime]
    exec_id: Optional[int] = None

    @property
    def is_finished(self) -> bool:
        # End-before-start and end-without-start rows are treated as unfinished.
        return self.start_ts is not None and self.end_ts is not None and self.end_ts >= self.start_ts

    @property
    def duration_ms(self) -> Optional[int]:
        if not self.is_finished:
            return None
        return (self.end_ts - self.start_ts) // _ONE_MS

    @staticmethod
    def new(
        status: Union[Status, str, int],
        start_ts: Optional[datetime] = None,
        end_ts: Optional[datetime] = None,
        exec_id: Optional[int] = None,
    ) -> "ExecutionSample":
        return ExecutionSample(
            status=Status.parse(status),
            start_ts=start_ts,
            end_ts=end_ts,
            exec_id=exec_id,
        )


@dataclass(frozen=True)
class ScheduledFlow:
    """The execute-flow action of a trigger, with the trigger's next check instant."""

    flow: FlowRef
    next_check_ts: Optional[datetime] = None
    trigger_id: Optional[int] = None


@dataclass(frozen=True)
class FlowHistory:
    flow: FlowRef
    latest: Optional[ExecutionSample]
    recent_successes: Tuple[ExecutionSample, ...] = ()
    next_check_ts: Optional[datetime] = None


@dataclass(frozen=True)
class RuntimeStatistics:
    last_duration_ms: int = 0
    average_duration_ms: int = 0
    max_duration_ms: int = 0


@dataclass(frozen=True)
class ThresholdDecision:
    healthy: bool
    annotation: Optional[str] = None
    deadline_ts: Optional[datetime] = None


@dataclass(frozen=True)
class FlowHealthRecord:
    flow_name: str
    project_id: ProjectId
    start_time: str
    end_time: str
    last_succeeded_runtime: str
    average_succeeded_runtime: str
    max_succeeded_runtime: str
    next_execution_time: str
    status: str
    status_color: str
    healthy: bool
    statistics: RuntimeStatistics = field(default_factory=RuntimeStatistics)
    deadline_ts: Optional[datetime] = None


@dataclass(frozen=True)
class BatchHealthResult:
    records: Tuple[FlowHealthRecord, ...]
    all_healthy: bool
    evaluated_at: datetime
