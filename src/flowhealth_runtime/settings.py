from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Runtime settings sourced from environment variables."""

    log_level: str = "INFO"
    # Evaluation defaults
    default_history_limit: int = 30
    default_tolerance_fraction: float = 0.1
    zero_history_policy: str = "overdue"
    # File adapter
    fixtures_path: Optional[str] = None
    # Databricks settings
    databricks_server_hostname: Optional[str] = None
    databricks_http_path: Optional[str] = None
    databricks_access_token: Optional[str] = None
    databricks_catalog: Optional[str] = None
    databricks_schema: Optional[str] = None
    databricks_table_prefix: str = ""
    databricks_executions_table: str = "execution_flows"
    databricks_triggers_table: str = "triggers"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            default_history_limit=int(os.getenv("DEFAULT_HISTORY_LIMIT", cls.default_history_limit)),
            default_tolerance_fraction=float(os.getenv("DEFAULT_TOLERANCE_FRACTION", cls.default_tolerance_fraction)),
            zero_history_policy=os.getenv("ZERO_HISTORY_POLICY", cls.zero_history_policy).lower(),
            fixtures_path=os.getenv("FIXTURES_PATH"),
            databricks_server_hostname=os.getenv("DATABRICKS_SERVER_HOSTNAME"),
            databricks_http_path=os.getenv("DATABRICKS_HTTP_PATH"),
            databricks_access_token=os.getenv("DATABRICKS_ACCESS_TOKEN"),
            databricks_catalog=os.getenv("DATABRICKS_CATALOG"),
            databricks_schema=os.getenv("DATABRICKS_SCHEMA"),
            databricks_table_prefix=os.getenv("DATABRICKS_TABLE_PREFIX", cls.databricks_table_prefix),
            databricks_executions_table=os.getenv("DATABRICKS_EXECUTIONS_TABLE", cls.databricks_executions_table),
            databricks_triggers_table=os.getenv("DATABRICKS_TRIGGERS_TABLE", cls.databricks_triggers_table),
        )


def get_settings(_cache: dict[str, Settings] = {}) -> Settings:
    """Provide a simple cached settings object."""

    if "settings" not in _cache:
        _cache["settings"] = Settings.from_env()
    return _cache["settings"]
