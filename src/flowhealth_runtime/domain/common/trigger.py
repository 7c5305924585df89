from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Tuple, Union

from flowhealth_runtime.domain.common.ids import FlowRef, ProjectId


@dataclass(frozen=True)
class ExecuteFlowAction:
    project_id: ProjectId
    flow_name: str
    kind: Literal["execute_flow"] = "execute_flow"

    @property
    def flow(self) -> FlowRef:
        return FlowRef(project_id=self.project_id, flow_name=self.flow_name)


@dataclass(frozen=True)
class OtherAction:
    """Any trigger action that does not start a flow (alerts, kill actions, ...)."""

    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)


TriggerAction = Union[ExecuteFlowAction, OtherAction]


@dataclass(frozen=True)
class Trigger:
    trigger_id: int
    actions: Tuple[TriggerAction, ...]
    next_check_ts: Optional[datetime] = None
    schedule_id: Optional[str] = None

    def execute_flow_action(self) -> Optional[ExecuteFlowAction]:
        for action in self.actions:
            if action.kind == "execute_flow":
                return action
        return None
