"""Diagram Validator: deterministic line-rule validation for Mermaid-style diagrams.

Usage:
    from mermaid_validator.validators import validation_engine

    diagnostic = validation_engine.validate(diagram_code)
    if not diagnostic.is_valid:
        # Report diagnostic.error at diagnostic.line
"""

from mermaid_validator.validators.engine import ValidationEngine, validation_engine
from mermaid_validator.validators.models import (
    BatchDiagnostic,
    Diagnostic,
    Dialect,
    ErrorKind,
    RealtimeDiagnostic,
    ValidatorStats,
)

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "Diagnostic",
    "BatchDiagnostic",
    "RealtimeDiagnostic",
    "ValidatorStats",
    "Dialect",
    "ErrorKind",
]
