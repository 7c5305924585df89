from __future__ import annotations

from typing import Iterable, Optional, Protocol

from flowhealth_runtime.domain.common.ids import ScheduleId
from flowhealth_runtime.domain.flow_health.model import ScheduledFlow


class ScheduleRepository(Protocol):
    def list_scheduled_flows(self, schedule_id: Optional[ScheduleId] = None) -> Iterable[ScheduledFlow]: ...
