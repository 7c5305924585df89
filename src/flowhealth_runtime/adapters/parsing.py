"""Row and document parsing shared by the file and Databricks adapters."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from flowhealth_runtime.domain.common.ids import ProjectId
from flowhealth_runtime.domain.common.trigger import ExecuteFlowAction, OtherAction, Trigger, TriggerAction
from flowhealth_runtime.domain.flow_health.model import ExecutionSample, ScheduledFlow

logger = logging.getLogger(__name__)

UNSET_TIMESTAMP = -1


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp column.

    Accepts epoch milliseconds (``-1`` meaning unset), ISO 8601 strings and
    datetimes. Naive values are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        if value == UNSET_TIMESTAMP:
            return None
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.lstrip("-").isdigit():
            return parse_timestamp(int(text))
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            parsed = None
            for fmt in ["%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M:%S.%f"]:
                try:
                    parsed = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
            if parsed is None:
                raise ValueError(f"Could not parse timestamp: {value!r}") from None
        return parse_timestamp(parsed)
    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}")


def parse_execution(row: Mapping[str, Any]) -> ExecutionSample:
    return ExecutionSample.new(
        status=row["status"],
        start_ts=parse_timestamp(row.get("start_time")),
        end_ts=parse_timestamp(row.get("end_time")),
        exec_id=row.get("exec_id"),
    )


def parse_action(data: Mapping[str, Any]) -> TriggerAction:
    kind = data["type"]
    if kind == "execute_flow":
        return ExecuteFlowAction(project_id=ProjectId(int(data["project_id"])), flow_name=data["flow_name"])
    payload = {k: v for k, v in data.items() if k != "type"}
    return OtherAction(kind=kind, payload=payload)


def parse_trigger(row: Mapping[str, Any]) -> Trigger:
    actions = row.get("actions") or []
    if isinstance(actions, str):
        actions = json.loads(actions)
    return Trigger(
        trigger_id=int(row["trigger_id"]),
        actions=tuple(parse_action(a) for a in actions),
        next_check_ts=parse_timestamp(row.get("next_check_time")),
        schedule_id=row.get("schedule_id"),
    )


def scheduled_flows(triggers: Iterable[Trigger]) -> list[ScheduledFlow]:
    """Keep the triggers that start a flow, as ``ScheduledFlow`` entries in trigger order."""
    result = []
    for trigger in triggers:
        action = trigger.execute_flow_action()
        if action is None:
            logger.debug(f"Trigger {trigger.trigger_id} has no execute_flow action, skipping")
            continue
        result.append(
            ScheduledFlow(flow=action.flow, next_check_ts=trigger.next_check_ts, trigger_id=trigger.trigger_id)
        )
    return result
