"""Type detector: decides which dialect a diagram claims to be."""

from typing import Sequence

from mermaid_validator.validators.models import Dialect
from mermaid_validator.validators.rules import RULE_TABLES, RuleTable, is_meaningful, trim


def detect_dialect(lines: Sequence[str], tables: Sequence[RuleTable] = RULE_TABLES) -> Dialect:
    """Classify the first meaningful line against each declaration rule.

    Args:
        lines: Diagram source split on newlines
        tables: Rule tables in detection order

    Returns:
        The dialect of the first matching declaration, or Dialect.UNKNOWN
        when there is no meaningful line or nothing matches.
    """
    first_line = next((line for line in lines if is_meaningful(line)), None)
    if first_line is None:
        return Dialect.UNKNOWN

    candidate = trim(first_line).lower()
    for table in tables:
        if table.declaration.matches(candidate):
            return table.dialect

    return Dialect.UNKNOWN


def count_elements(lines: Sequence[str]) -> int:
    """Count non-blank, non-comment lines."""
    return sum(1 for line in lines if is_meaningful(line))
