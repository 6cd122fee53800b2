"""Validation Engine: detects the dialect, runs its validator, builds the Diagnostic.

This is the main entry point for diagram validation.

Usage:
    engine = ValidationEngine()
    diagnostic = engine.validate(diagram_code)
    if not diagnostic.is_valid:
        # Show diagnostic.error at diagnostic.line
"""

import time
from typing import Any, Optional, Sequence

import structlog

from mermaid_validator.validators.base import BaseValidator
from mermaid_validator.validators.classifier import extract_line_number, get_suggestion
from mermaid_validator.validators.detector import count_elements, detect_dialect
from mermaid_validator.validators.models import (
    SUPPORTED_TYPES,
    BatchDiagnostic,
    Diagnostic,
    Dialect,
    ErrorKind,
    RealtimeDiagnostic,
    ScanResult,
    ValidatorStats,
)
from mermaid_validator.validators.rule_table_validator import default_validators

logger = structlog.get_logger()

INPUT_ERROR_MESSAGE = "Diagram code must be a non-empty string"
NO_TYPE_MESSAGE = "No valid diagram type detected"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class ValidationEngine:
    """Orchestrates detection and per-dialect validation.

    Design principles:
        - Deterministic: same input → same output
        - Fail-fast: a scan stops at the first rejected line
        - Never raises: every call returns a Diagnostic
        - Extensible: add validators without modifying engine
    """

    def __init__(self, validators: Optional[list[BaseValidator]] = None):
        """Initialize with default validators or custom list.

        Args:
            validators: Optional list of validators. If None, uses all defaults.
        """
        self.validators: dict[Dialect, BaseValidator] = {
            v.dialect: v for v in (validators if validators is not None else default_validators())
        }

    def validate(self, diagram_code: Any) -> Diagnostic:
        """Validate one diagram.

        Args:
            diagram_code: Diagram source text

        Returns:
            Diagnostic with validity, first error (if any), timing and counts
        """
        if not diagram_code or not isinstance(diagram_code, str):
            return Diagnostic(
                is_valid=False,
                error=INPUT_ERROR_MESSAGE,
                type=ErrorKind.INPUT_ERROR,
                processing_time=0,
                diagram_type=Dialect.UNKNOWN.value,
                element_count=0,
            )

        start_time = time.perf_counter()
        lines = diagram_code.split("\n")
        dialect = Dialect.UNKNOWN

        try:
            dialect = detect_dialect(lines)

            if dialect == Dialect.UNKNOWN:
                return Diagnostic(
                    is_valid=False,
                    error=NO_TYPE_MESSAGE,
                    type=ErrorKind.NO_TYPE,
                    line=1,
                    suggestion=get_suggestion(ErrorKind.NO_TYPE),
                    processing_time=_elapsed_ms(start_time),
                    diagram_type=Dialect.UNKNOWN.value,
                    element_count=0,
                )

            result = self._validate_dialect(dialect, lines)
            diagnostic = Diagnostic(
                **result.model_dump(),
                processing_time=_elapsed_ms(start_time),
                diagram_type=dialect.value,
                element_count=count_elements(lines),
            )

        except Exception as e:
            logger.error(
                "validation_failed",
                dialect=dialect.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return Diagnostic(
                is_valid=False,
                error=str(e),
                type=ErrorKind.GENERAL,
                line=extract_line_number(str(e)) or None,
                suggestion=get_suggestion(ErrorKind.GENERAL),
                processing_time=_elapsed_ms(start_time),
                diagram_type=dialect.value,
                element_count=0,
            )

        logger.debug(
            "validation_complete",
            dialect=diagnostic.diagram_type,
            is_valid=diagnostic.is_valid,
            error_type=diagnostic.type,
            line=diagnostic.line,
            duration_ms=diagnostic.processing_time,
        )
        return diagnostic

    def _validate_dialect(self, dialect: Dialect, lines: Sequence[str]) -> ScanResult:
        validator = self.validators.get(dialect)
        if validator is None:
            logger.warning("validator_missing", dialect=dialect.value)
            return ScanResult.rejected(
                ErrorKind.UNSUPPORTED,
                f"Unsupported diagram type: {dialect.value}",
                line=1,
                suggestion="Use a supported diagram type",
            )
        return validator.validate(lines)

    def validate_batch(self, diagrams: Sequence[Any]) -> list[BatchDiagnostic]:
        """Validate diagrams one after another, keeping their positions.

        A failing diagram never stops the batch.
        """
        start_time = time.perf_counter()
        results = [
            BatchDiagnostic(**self.validate(code).model_dump(), index=i)
            for i, code in enumerate(diagrams)
        ]

        logger.info(
            "batch_validation_complete",
            total=len(results),
            invalid=sum(1 for r in results if not r.is_valid),
            duration_ms=_elapsed_ms(start_time),
        )
        return results

    def validate_realtime(
        self,
        diagram_code: Any,
        change_type: str,
        line_number: Optional[int] = None,
    ) -> RealtimeDiagnostic:
        """Validate for live-editing feedback, adding a one-line summary.

        Args:
            diagram_code: Current diagram source
            change_type: One of "add", "remove", "modify", "full"
            line_number: Line the edit happened on, if known
        """
        diagnostic = self.validate(diagram_code)

        if diagnostic.is_valid:
            message = f"Valid {diagnostic.diagram_type} diagram ({diagnostic.element_count} elements)"
        else:
            message = diagnostic.error
            if diagnostic.line:
                message += f" (line {diagnostic.line})"
            if diagnostic.suggestion:
                message += f"\nHint: {diagnostic.suggestion}"

        return RealtimeDiagnostic(
            **diagnostic.model_dump(),
            change_type=change_type,
            line_number=line_number or None,
            message=message,
        )

    @staticmethod
    def supported_types() -> list[str]:
        """Declaration keywords of every supported dialect."""
        return list(SUPPORTED_TYPES)

    def stats(self) -> ValidatorStats:
        """Snapshot of this engine's configuration."""
        return ValidatorStats(
            supported_types=len(SUPPORTED_TYPES),
            dialects=[d.value for d in self.validators],
        )

    def add_validator(self, validator: BaseValidator) -> None:
        """Register a validator, replacing any existing one for its dialect."""
        self.validators[validator.dialect] = validator

    def remove_validator(self, dialect: Dialect) -> None:
        """Unregister the validator for a dialect."""
        self.validators.pop(Dialect(dialect), None)


# Module-level singleton
validation_engine = ValidationEngine()
