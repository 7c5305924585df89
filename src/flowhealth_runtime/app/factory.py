from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowhealth_runtime.ports.execution_history_repository import ExecutionHistoryRepository
    from flowhealth_runtime.ports.schedule_repository import ScheduleRepository

from flowhealth_runtime.adapters.databricks.client import DatabricksSqlClient
from flowhealth_runtime.adapters.databricks.history_repo import DatabricksExecutionHistoryRepository
from flowhealth_runtime.adapters.databricks.schedule_repo import DatabricksScheduleRepository
from flowhealth_runtime.adapters.file.json_fixture_store import create_file_repositories
from flowhealth_runtime.adapters.memory.in_memory_execution_history_repository import (
    InMemoryExecutionHistoryRepository,
)
from flowhealth_runtime.adapters.memory.in_memory_schedule_repository import InMemoryScheduleRepository
from flowhealth_runtime.domain.common.ids import CorrelationId
from flowhealth_runtime.settings import get_settings


def create_adapters(
    correlation_id: str | None = None,
) -> tuple["ScheduleRepository", "ExecutionHistoryRepository"]:
    """
    Factory function to create repositories based on RUNTIME_ADAPTERS environment variable.

    RUNTIME_ADAPTERS=databricks reads the mirror tables, RUNTIME_ADAPTERS=file
    reads the JSON document at FIXTURES_PATH. Otherwise empty in-memory
    repositories are returned (default).
    """
    settings = get_settings()
    runtime_adapters = os.getenv("RUNTIME_ADAPTERS", "").lower()

    if runtime_adapters == "databricks":
        required_settings = [
            ("DATABRICKS_SERVER_HOSTNAME", settings.databricks_server_hostname),
            ("DATABRICKS_HTTP_PATH", settings.databricks_http_path),
            ("DATABRICKS_ACCESS_TOKEN", settings.databricks_access_token),
        ]
        missing = [name for name, value in required_settings if not value]
        if missing:
            raise ValueError(f"Missing required Databricks settings: {', '.join(missing)}")

        correlation_id_obj = CorrelationId(correlation_id) if correlation_id else None
        client = DatabricksSqlClient(settings, correlation_id_obj)
        schedule_repo: ScheduleRepository = DatabricksScheduleRepository(client, settings)
        history_repo: ExecutionHistoryRepository = DatabricksExecutionHistoryRepository(client, settings)

    elif runtime_adapters == "file":
        if not settings.fixtures_path:
            raise ValueError("RUNTIME_ADAPTERS=file requires FIXTURES_PATH")
        schedule_repo, history_repo = create_file_repositories(settings.fixtures_path)

    else:
        schedule_repo = InMemoryScheduleRepository()
        history_repo = InMemoryExecutionHistoryRepository()

    return (schedule_repo, history_repo)
