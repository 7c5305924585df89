from __future__ import annotations

from typing import Optional, Protocol

from flowhealth_runtime.domain.common.ids import FlowRef
from flowhealth_runtime.domain.flow_health.model import ExecutionSample


class ExecutionHistoryRepository(Protocol):
    def fetch_latest_execution(self, flow: FlowRef) -> Optional[ExecutionSample]: ...

    def fetch_recent_successes(self, flow: FlowRef, limit: int) -> list[ExecutionSample]: ...
