from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

ProjectId = NewType("ProjectId", int)
ScheduleId = NewType("ScheduleId", str)


@dataclass(frozen=True)
class CorrelationId:
    value: str


@dataclass(frozen=True)
class FlowRef:
    project_id: ProjectId
    flow_name: str

    @property
    def flow_id(self) -> str:
        return self.flow_name

    def __str__(self) -> str:
        return f"{self.project_id}/{self.flow_name}"
