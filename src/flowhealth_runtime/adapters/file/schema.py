from __future__ import annotations

_TIMESTAMP = {"type": ["integer", "string", "null"]}

FIXTURES_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["triggers", "executions"],
    "properties": {
        "triggers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["trigger_id", "actions"],
                "properties": {
                    "trigger_id": {"type": "integer"},
                    "schedule_id": {"type": "string"},
                    "next_check_time": _TIMESTAMP,
                    "actions": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["type"],
                            "properties": {"type": {"type": "string"}},
                            "if": {"properties": {"type": {"const": "execute_flow"}}},
                            "then": {
                                "required": ["project_id", "flow_name"],
                                "properties": {
                                    "project_id": {"type": "integer"},
                                    "flow_name": {"type": "string", "minLength": 1},
                                },
                            },
                        },
                    },
                },
            },
        },
        "executions": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["exec_id", "project_id", "flow_name", "status"],
                "properties": {
                    "exec_id": {"type": "integer"},
                    "project_id": {"type": "integer"},
                    "flow_name": {"type": "string", "minLength": 1},
                    "status": {"type": ["string", "integer"]},
                    "start_time": _TIMESTAMP,
                    "end_time": _TIMESTAMP,
                },
            },
        },
    },
}
