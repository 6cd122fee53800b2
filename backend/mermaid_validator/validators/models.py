"""Validation models: dialect tags, error kinds and the diagnostic structure.

All validation is deterministic: same input → same output. A Diagnostic is
built once per call and never mutated afterwards.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Dialect(str, Enum):
    """Diagram dialects the detector can assign, in detection order."""

    FLOWCHART = "graph"
    SEQUENCE = "sequence"
    CLASS = "classDiagram"
    STATE = "stateDiagram"
    ER = "erDiagram"
    GANTT = "gantt"
    JOURNEY = "journey"
    PIE = "pie"
    GIT_GRAPH = "gitGraph"
    MINDMAP = "mindmap"
    UNKNOWN = "unknown"


class ErrorKind(str, Enum):
    """Error classification for a failed validation.

    The first six are produced by the rule engine. The remaining kinds are
    only produced by message classification (see classifier.py).
    """

    INPUT_ERROR = "input_error"
    NO_TYPE = "no_type"
    NO_DATA = "no_data"
    SYNTAX = "syntax"
    UNSUPPORTED = "unsupported"
    GENERAL = "general"

    UNKNOWN_COMMAND = "unknown_command"
    PARSE = "parse"
    IDENTIFIER = "identifier"
    RELATION = "relation"


# Dialect names accepted as declaration keywords, reported by listings
SUPPORTED_TYPES: tuple[str, ...] = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "gantt",
    "journey",
    "pie",
    "gitGraph",
    "mindmap",
)


class ScanResult(BaseModel):
    """Outcome of one dialect scan, before timing and counts are attached."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error: Optional[str] = None
    type: Optional[ErrorKind] = None
    line: Optional[int] = None
    suggestion: Optional[str] = None

    @classmethod
    def accepted(cls) -> "ScanResult":
        return cls(is_valid=True)

    @classmethod
    def rejected(
        cls,
        kind: ErrorKind,
        message: str,
        line: Optional[int] = None,
        suggestion: Optional[str] = None,
    ) -> "ScanResult":
        return cls(
            is_valid=False,
            error=message,
            type=kind,
            line=line,
            suggestion=suggestion,
        )


class Diagnostic(BaseModel):
    """Structured result of validating one diagram.

    Serializes with camelCase keys (isValid, processingTime, ...) so the
    payload matches what editor integrations already consume.
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    is_valid: bool
    error: Optional[str] = None
    type: Optional[ErrorKind] = None
    line: Optional[int] = Field(default=None, ge=1)
    suggestion: Optional[str] = None
    processing_time: float = Field(default=0.0, ge=0, description="Milliseconds")
    diagram_type: str = Dialect.UNKNOWN.value
    element_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_error_fields(self) -> "Diagnostic":
        if self.is_valid and any(
            value is not None for value in (self.error, self.type, self.line, self.suggestion)
        ):
            raise ValueError("a valid diagnostic cannot carry error fields")
        if not self.is_valid and self.error is None:
            raise ValueError("an invalid diagnostic needs an error message")
        return self

    def comparable(self) -> dict:
        """Every field except processing_time, for determinism checks."""
        return self.model_dump(exclude={"processing_time"})


class BatchDiagnostic(Diagnostic):
    """A Diagnostic tagged with its position in the submitted batch."""

    index: int = Field(ge=0)


class RealtimeDiagnostic(Diagnostic):
    """A Diagnostic enriched for live-editing feedback."""

    change_type: Literal["add", "remove", "modify", "full"]
    line_number: Optional[int] = None
    realtime: bool = True
    message: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ValidatorStats(BaseModel):
    """Point-in-time snapshot of an engine's configuration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_initialized: bool = True
    supported_types: int
    dialects: list[str]
    validation_type: str = "regex-based"
