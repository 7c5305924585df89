from __future__ import annotations

from fastapi import FastAPI

from flowhealth_runtime.app.api.routers import flow_health_router
from flowhealth_runtime.app.health import router as health_router
from flowhealth_runtime.observability.logging import configure_logging

configure_logging()

app = FastAPI(title="flowhealth-runtime")
app.include_router(health_router)
app.include_router(flow_health_router, tags=["flows"])
