"""Error classifier: maps raw failure messages to an error kind and a hint.

Pure functions, no state. The rule engine uses the suggestion table for its
façade-level failures; an engine-delegating backend would feed parser
exception messages through classify_error().
"""

import re
from typing import Optional

from mermaid_validator.validators.models import ErrorKind

# Consumers match on these strings; keep them verbatim
SUGGESTIONS: dict[ErrorKind, str] = {
    ErrorKind.SYNTAX: "Check for missing semicolons, brackets, or incorrect syntax",
    ErrorKind.NO_TYPE: "Add a diagram type at the beginning (e.g., graph TD, sequenceDiagram)",
    ErrorKind.UNKNOWN_COMMAND: "Verify the command is supported in your diagram syntax version",
    ErrorKind.PARSE: "Check the structure and syntax of your diagram",
    ErrorKind.IDENTIFIER: "Ensure all identifiers are valid and properly referenced",
    ErrorKind.RELATION: "Check arrow syntax and node connections",
    ErrorKind.GENERAL: "Review the diagram syntax and structure",
}

# Ordered: the first substring found decides the kind
_CLASSIFICATION_ORDER: tuple[tuple[str, ErrorKind], ...] = (
    ("syntax error", ErrorKind.SYNTAX),
    ("no diagram type", ErrorKind.NO_TYPE),
    ("unknown", ErrorKind.UNKNOWN_COMMAND),
    ("parse", ErrorKind.PARSE),
    ("identifier", ErrorKind.IDENTIFIER),
    ("relation", ErrorKind.RELATION),
)

_LINE_NUMBER = re.compile(r"line ([0-9]+)", re.IGNORECASE)


def classify_error(message: Optional[str]) -> ErrorKind:
    """Classify a raw error message by ordered substring containment."""
    text = (message or "").lower()
    for needle, kind in _CLASSIFICATION_ORDER:
        if needle in text:
            return kind
    return ErrorKind.GENERAL


def get_suggestion(kind: ErrorKind) -> str:
    """Return the fixed suggestion for a kind, falling back to the general one."""
    return SUGGESTIONS.get(ErrorKind(kind), SUGGESTIONS[ErrorKind.GENERAL])


def extract_line_number(message: Optional[str]) -> Optional[int]:
    """Pull the first 'line <n>' reference out of a message, if any."""
    match = _LINE_NUMBER.search(message or "")
    return int(match.group(1)) if match else None
