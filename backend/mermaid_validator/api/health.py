"""Health check endpoint."""

import time
from fastapi import APIRouter

from mermaid_validator.config import APP_VERSION
from mermaid_validator.models.responses import HealthResponse

router = APIRouter()

_start_time = time.time()


def uptime_seconds() -> float:
    return round(time.time() - _start_time, 2)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check. The engine has no external dependencies to probe."""
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        uptime_seconds=uptime_seconds(),
    )
