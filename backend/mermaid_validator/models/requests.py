"""API request models."""

from pydantic import Field
from typing import Any, Literal, Optional

from mermaid_validator.models.base import CamelModel


class ValidateRequest(CamelModel):
    """Request to validate a single diagram."""

    # Left unconstrained: empty, missing or non-text code is reported as input_error
    diagram_code: Any = Field(
        default=None,
        description="The diagram source to validate",
        examples=["graph TD\n    A[Start] --> B[End]"],
    )


class ValidateBatchRequest(CamelModel):
    """Request to validate several diagrams in order."""

    # Items are unconstrained so each bad entry gets its own input_error
    diagrams: list[Any] = Field(
        ...,
        description="Diagram sources, validated in the given order",
    )


class RealtimeValidateRequest(CamelModel):
    """Live-editing validation hook."""

    diagram_code: Any = None
    change_type: Literal["add", "remove", "modify", "full"]
    line_number: Optional[int] = Field(default=None, ge=1)
