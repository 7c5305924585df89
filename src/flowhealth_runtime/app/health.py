from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness probe for the service itself (not the monitored flows)."""
    return {"status": "ok"}
