from __future__ import annotations

import logging
from typing import Iterable, Optional

from flowhealth_runtime.adapters.databricks.client import DatabricksSqlClient
from flowhealth_runtime.adapters.parsing import parse_trigger, scheduled_flows
from flowhealth_runtime.domain.common.ids import ScheduleId
from flowhealth_runtime.domain.flow_health.model import ScheduledFlow
from flowhealth_runtime.ports.schedule_repository import ScheduleRepository
from flowhealth_runtime.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DatabricksScheduleRepository(ScheduleRepository):
    """Triggers read from the ``triggers`` mirror table; ``actions`` is a JSON array column."""

    def __init__(self, client: DatabricksSqlClient, settings: Settings | None = None) -> None:
        self.client = client
        self.settings = settings or get_settings()
        self.table = client.table_name(self.settings.databricks_triggers_table)

    def list_scheduled_flows(self, schedule_id: Optional[ScheduleId] = None) -> Iterable[ScheduledFlow]:
        sql = f"SELECT trigger_id, schedule_id, next_check_time, actions FROM {self.table}"
        params = []
        if schedule_id is not None:
            sql += " WHERE schedule_id = ?"
            params.append(schedule_id)
        sql += " ORDER BY trigger_id"

        rows = self.client.query(sql, params)
        logger.info(f"got {len(rows)} triggers from {self.table}")
        return scheduled_flows(parse_trigger(row) for row in rows)
