"""Base validator: abstract class implementing the Strategy Pattern.

Each dialect validator is a standalone, independently testable unit.
New dialects are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from mermaid_validator.validators.models import Dialect, ErrorKind, ScanResult


class BaseValidator(ABC):
    """Abstract base for all dialect validators.

    Contract:
        - validate() is deterministic: same lines → same result
        - validate() stops at the first rejected line
        - validate() never looks at more than one line at a time
    """

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """Dialect this validator is registered for."""
        ...

    @property
    def name(self) -> str:
        """Human-readable name for logging."""
        return f"{self.dialect.value}Validator"

    @abstractmethod
    def validate(self, lines: Sequence[str]) -> ScanResult:
        """Scan the diagram lines.

        Args:
            lines: Diagram source split on newlines, untrimmed

        Returns:
            ScanResult, accepted or carrying the first failure
        """
        ...

    # ── Helper Methods ──

    def _reject(
        self,
        kind: ErrorKind,
        message: str,
        line: Optional[int] = None,
        suggestion: Optional[str] = None,
    ) -> ScanResult:
        """Convenience method to create a rejected ScanResult."""
        return ScanResult.rejected(kind, message, line=line, suggestion=suggestion)

    def _accept(self) -> ScanResult:
        return ScanResult.accepted()
