"""API routers for monitoring-facing endpoints."""

from flowhealth_runtime.app.api.routers.flow_health import router as flow_health_router

__all__ = ["flow_health_router"]
