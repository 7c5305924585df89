from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from flowhealth_runtime.domain.common.ids import ScheduleId
from flowhealth_runtime.domain.flow_health.model import ScheduledFlow
from flowhealth_runtime.ports.schedule_repository import ScheduleRepository


class InMemoryScheduleRepository(ScheduleRepository):
    """Schedule store backed by plain lists, keyed by schedule id."""

    def __init__(
        self,
        flows: Optional[List[ScheduledFlow]] = None,
        schedules: Optional[Dict[str, List[ScheduledFlow]]] = None,
    ) -> None:
        self.flows = list(flows or [])
        self.schedules = {k: list(v) for k, v in (schedules or {}).items()}

    def list_scheduled_flows(self, schedule_id: Optional[ScheduleId] = None) -> Iterable[ScheduledFlow]:
        if schedule_id is None:
            result = list(self.flows)
            for scheduled in self.schedules.values():
                result.extend(scheduled)
            return result
        return list(self.schedules.get(schedule_id, []))
