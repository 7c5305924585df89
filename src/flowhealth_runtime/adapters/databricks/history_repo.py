from __future__ import annotations

import logging
from typing import Optional

from flowhealth_runtime.adapters.databricks.client import DatabricksSqlClient
from flowhealth_runtime.adapters.parsing import parse_execution
from flowhealth_runtime.domain.common.ids import FlowRef
from flowhealth_runtime.domain.common.status import Status
from flowhealth_runtime.domain.flow_health.model import ExecutionSample
from flowhealth_runtime.ports.execution_history_repository import ExecutionHistoryRepository
from flowhealth_runtime.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DatabricksExecutionHistoryRepository(ExecutionHistoryRepository):
    """Execution history read from the ``execution_flows`` mirror table."""

    def __init__(self, client: DatabricksSqlClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.table = client.table_name(self.settings.databricks_executions_table)

    def _select(self, flow: FlowRef, limit: int, status: Optional[Status] = None) -> list[ExecutionSample]:
        conditions = ["project_id = ?", "flow_id = ?"]
        params: list = [int(flow.project_id), flow.flow_name]
        if status is not None:
            conditions.append("status = ?")
            params.append(int(status))

        sql = f"""
        SELECT exec_id, status, start_time, end_time
        FROM {self.table}
        WHERE {" AND ".join(conditions)}
        ORDER BY exec_id DESC
        LIMIT {int(limit)}
        """
        rows = self.client.query(sql, params)
        return [parse_execution(row) for row in rows]

    def fetch_latest_execution(self, flow: FlowRef) -> Optional[ExecutionSample]:
        samples = self._select(flow, limit=1)
        return samples[0] if samples else None

    def fetch_recent_successes(self, flow: FlowRef, limit: int) -> list[ExecutionSample]:
        return self._select(flow, limit=limit, status=Status.SUCCEEDED)
