"""Validation API: single, batch and real-time validation plus server info."""

from datetime import datetime, timezone

from fastapi import APIRouter

import structlog

from mermaid_validator.api.health import uptime_seconds
from mermaid_validator.config import APP_NAME, APP_VERSION, get_settings
from mermaid_validator.models.requests import (
    RealtimeValidateRequest,
    ValidateBatchRequest,
    ValidateRequest,
)
from mermaid_validator.models.responses import (
    InfoResponse,
    ServerInfo,
    ValidateBatchResponse,
    ValidateResponse,
)
from mermaid_validator.validators import RealtimeDiagnostic, validation_engine

logger = structlog.get_logger()

router = APIRouter()

FEATURES = [
    "Real-time syntax validation",
    "Batch validation",
    "Detailed error reporting",
    "Performance monitoring",
    "Lightweight memory footprint",
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ─── Endpoints ───


@router.post("/validate", response_model=ValidateResponse)
async def validate_diagram(request: ValidateRequest):
    """Validate one diagram and return its diagnostic."""
    code = request.diagram_code
    logger.info("validate_requested", chars=len(code) if isinstance(code, str) else 0)

    return ValidateResponse(
        validation=validation_engine.validate(code),
        timestamp=_now(),
    )


@router.post("/validate/batch", response_model=ValidateBatchResponse)
async def validate_batch(request: ValidateBatchRequest):
    """Validate several diagrams in submission order."""
    max_size = get_settings().MAX_BATCH_SIZE
    if len(request.diagrams) > max_size:
        raise ValueError(
            f"Batch of {len(request.diagrams)} diagrams exceeds the limit of {max_size}"
        )

    logger.info("batch_requested", size=len(request.diagrams))

    return ValidateBatchResponse(
        results=validation_engine.validate_batch(request.diagrams),
        timestamp=_now(),
    )


@router.post("/validate/realtime", response_model=RealtimeDiagnostic)
async def validate_realtime(request: RealtimeValidateRequest):
    """Live-editing hook: same checks, plus a one-line summary message."""
    logger.info(
        "realtime_requested",
        change_type=request.change_type,
        line_number=request.line_number,
    )
    return validation_engine.validate_realtime(
        request.diagram_code,
        change_type=request.change_type,
        line_number=request.line_number,
    )


@router.get("/info", response_model=InfoResponse)
async def get_info():
    """Supported dialects and engine stats."""
    return InfoResponse(
        server=ServerInfo(name=APP_NAME, version=APP_VERSION, uptime_seconds=uptime_seconds()),
        supported_types=validation_engine.supported_types(),
        stats=validation_engine.stats(),
        features=FEATURES,
        timestamp=_now(),
    )
