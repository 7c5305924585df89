from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, TypeVar

from databricks import sql as databricks_sql

from flowhealth_runtime.domain.common.ids import CorrelationId
from flowhealth_runtime.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DatabricksSqlClient:
    """Read-only client for the execution and trigger mirror tables, using the SQL Connector."""

    def __init__(self, settings: Settings, correlation_id: Optional[CorrelationId] = None) -> None:
        self.settings = settings
        self.correlation_id = correlation_id
        self._connection: Optional[Any] = None

    def _get_log_extra(self) -> dict[str, str]:
        extra = {}
        if self.correlation_id:
            extra["correlation_id"] = self.correlation_id.value
        return extra

    def _connect(self) -> Any:
        if self._connection is None:
            if not all(
                [
                    self.settings.databricks_server_hostname,
                    self.settings.databricks_http_path,
                    self.settings.databricks_access_token,
                ]
            ):
                raise ValueError(
                    "Databricks connection requires DATABRICKS_SERVER_HOSTNAME, "
                    "DATABRICKS_HTTP_PATH, and DATABRICKS_ACCESS_TOKEN"
                )

            logger.info(
                f"Connecting to Databricks server: {self.settings.databricks_server_hostname}",
                extra=self._get_log_extra(),
            )

            connection_params = {
                "server_hostname": self.settings.databricks_server_hostname,
                "http_path": self.settings.databricks_http_path,
                "access_token": self.settings.databricks_access_token,
            }
            if self.settings.databricks_catalog:
                connection_params["catalog"] = self.settings.databricks_catalog
            if self.settings.databricks_schema:
                connection_params["schema"] = self.settings.databricks_schema

            self._connection = databricks_sql.connect(**connection_params)

        return self._connection

    def _retry_on_error(self, operation: Callable[[], T], max_retries: int = 3, initial_delay: float = 1.0) -> T:
        """Execute operation with retry logic for transient connection errors."""
        for attempt in range(max_retries):
            try:
                return operation()
            except Exception as e:
                if attempt >= max_retries - 1:
                    logger.error(f"Query failed after {max_retries} attempts: {e}", extra=self._get_log_extra())
                    raise
                delay = initial_delay * (2**attempt)
                logger.warning(
                    f"Query failed (attempt {attempt + 1}/{max_retries}), retrying in {delay}s: {e}",
                    extra=self._get_log_extra(),
                )
                time.sleep(delay)
        raise RuntimeError("max_retries must be positive")

    def table_name(self, table: str) -> str:
        """Build fully qualified table name with catalog, schema and prefix."""
        parts = []
        if self.settings.databricks_catalog:
            parts.append(self.settings.databricks_catalog)
        if self.settings.databricks_schema:
            parts.append(self.settings.databricks_schema)
        parts.append(f"{self.settings.databricks_table_prefix}{table}")
        return ".".join(parts)

    def query(self, sql: str, params: Optional[list[Any]] = None) -> list[dict[str, Any]]:
        """Execute a SELECT and return one dict per row."""
        logger.debug(f"Executing query: {sql[:200]}...", extra=self._get_log_extra())

        def _execute_query() -> list[dict[str, Any]]:
            conn = self._connect()
            cursor = conn.cursor()
            try:
                if params:
                    cursor.execute(sql, parameters=params)
                else:
                    cursor.execute(sql)
                columns = [desc[0] for desc in cursor.description]
                rows = cursor.fetchall()
                return [dict(zip(columns, row)) for row in rows]
            finally:
                cursor.close()

        return self._retry_on_error(_execute_query)

    def close(self) -> None:
        if self._connection:
            try:
                self._connection.close()
                logger.info("Closed Databricks connection", extra=self._get_log_extra())
            except Exception as e:
                logger.warning(f"Error closing connection: {e}", extra=self._get_log_extra())
            finally:
                self._connection = None

    def __enter__(self) -> "DatabricksSqlClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
