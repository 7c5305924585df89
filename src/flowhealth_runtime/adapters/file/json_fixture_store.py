from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

import jsonschema

from flowhealth_runtime.adapters.memory.in_memory_execution_history_repository import (
    InMemoryExecutionHistoryRepository,
)
from flowhealth_runtime.adapters.file.schema import FIXTURES_SCHEMA
from flowhealth_runtime.adapters.parsing import parse_execution, parse_trigger, scheduled_flows
from flowhealth_runtime.application.errors import FixtureValidationError
from flowhealth_runtime.domain.common.ids import FlowRef, ProjectId, ScheduleId
from flowhealth_runtime.domain.common.trigger import Trigger
from flowhealth_runtime.domain.flow_health.model import ScheduledFlow
from flowhealth_runtime.ports.schedule_repository import ScheduleRepository

logger = logging.getLogger(__name__)


def load_fixtures(path: str | Path) -> dict[str, Any]:
    """Load a fixtures document and validate it against the bundled schema."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FixtureValidationError(f"Invalid JSON: {e}", path=str(path)) from e

    try:
        jsonschema.validate(instance=data, schema=FIXTURES_SCHEMA)
    except jsonschema.ValidationError as e:
        raise FixtureValidationError(f"Validation error: {e.message}", path=str(path)) from e
    return data


class FileScheduleRepository(ScheduleRepository):
    """Schedule store read from the ``triggers`` section of a fixtures document."""

    def __init__(self, triggers: Iterable[Trigger]) -> None:
        self.triggers = list(triggers)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "FileScheduleRepository":
        return cls(parse_trigger(row) for row in data["triggers"])

    def list_scheduled_flows(self, schedule_id: Optional[ScheduleId] = None) -> Iterable[ScheduledFlow]:
        triggers = self.triggers
        if schedule_id is not None:
            triggers = [t for t in triggers if t.schedule_id == schedule_id]
        return scheduled_flows(triggers)


class FileExecutionHistoryRepository(InMemoryExecutionHistoryRepository):
    """Execution history read from the ``executions`` section of a fixtures document."""

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "FileExecutionHistoryRepository":
        repo = cls()
        for row in data["executions"]:
            flow = FlowRef(project_id=ProjectId(row["project_id"]), flow_name=row["flow_name"])
            repo.add(flow, parse_execution(row))
        logger.info(f"Loaded {len(data['executions'])} executions for {len(repo.executions)} flows")
        return repo


def create_file_repositories(path: str | Path) -> tuple[FileScheduleRepository, FileExecutionHistoryRepository]:
    data = load_fixtures(path)
    try:
        return FileScheduleRepository.from_document(data), FileExecutionHistoryRepository.from_document(data)
    except ValueError as e:
        raise FixtureValidationError(str(e), path=str(path)) from e
