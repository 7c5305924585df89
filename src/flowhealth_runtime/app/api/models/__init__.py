"""Pydantic models for API responses."""

from flowhealth_runtime.app.api.models.flow_health import FlowHealthItem, FlowHealthReport

__all__ = [
    "FlowHealthItem",
    "FlowHealthReport",
]
