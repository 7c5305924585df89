from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from flowhealth_runtime.domain.common.ids import FlowRef
from flowhealth_runtime.domain.common.status import Status
from flowhealth_runtime.domain.flow_health.model import ExecutionSample
from flowhealth_runtime.ports.execution_history_repository import ExecutionHistoryRepository

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _recency_key(sample: ExecutionSample) -> tuple:
    # Executions are numbered in submission order; start time breaks ties for unnumbered samples.
    return (sample.exec_id or 0, sample.start_ts or _EPOCH)


class InMemoryExecutionHistoryRepository(ExecutionHistoryRepository):
    """Execution history held in memory; samples are kept most-recent-first per flow."""

    def __init__(self, executions: Optional[Dict[FlowRef, List[ExecutionSample]]] = None) -> None:
        self.executions: Dict[FlowRef, List[ExecutionSample]] = {}
        for flow, samples in (executions or {}).items():
            for sample in samples:
                self.add(flow, sample)

    def add(self, flow: FlowRef, sample: ExecutionSample) -> None:
        samples = self.executions.setdefault(flow, [])
        samples.append(sample)
        samples.sort(key=_recency_key, reverse=True)

    def fetch_latest_execution(self, flow: FlowRef) -> Optional[ExecutionSample]:
        samples = self.executions.get(flow, [])
        return samples[0] if samples else None

    def fetch_recent_successes(self, flow: FlowRef, limit: int) -> list[ExecutionSample]:
        succeeded = [s for s in self.executions.get(flow, []) if s.status == Status.SUCCEEDED]
        return succeeded[:limit]
