"""API response models."""

from typing import Literal
from datetime import datetime

from mermaid_validator.models.base import CamelModel
from mermaid_validator.validators.models import BatchDiagnostic, Diagnostic, ValidatorStats


class ValidateResponse(CamelModel):
    """Result of a single validation."""

    success: bool = True
    validation: Diagnostic
    timestamp: datetime


class ValidateBatchResponse(CamelModel):
    """Results of a batch validation, in submission order."""

    success: bool = True
    results: list[BatchDiagnostic]
    timestamp: datetime


class ServerInfo(CamelModel):
    """Identity of the running server."""

    name: str
    version: str
    uptime_seconds: float


class InfoResponse(CamelModel):
    """Supported dialects, engine stats and feature list."""

    server: ServerInfo
    supported_types: list[str]
    stats: ValidatorStats
    features: list[str]
    timestamp: datetime


class HealthResponse(CamelModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str = "1.0.0"
    uptime_seconds: float
