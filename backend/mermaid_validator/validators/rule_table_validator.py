"""Rule Table Validator: the single-pass line scanner shared by every dialect."""

from typing import Sequence

from mermaid_validator.validators.base import BaseValidator
from mermaid_validator.validators.models import Dialect, ErrorKind, ScanResult
from mermaid_validator.validators.rules import RULE_TABLES, RuleTable, is_meaningful, trim


class RuleTableValidator(BaseValidator):
    """Validates a diagram against one dialect's rule table.

    Every meaningful line must be the declaration, one of the table's line
    shapes, or one of its structural markers. The first line that is none
    of these ends the scan.
    """

    def __init__(self, table: RuleTable):
        self.table = table

    @property
    def dialect(self) -> Dialect:
        return self.table.dialect

    def validate(self, lines: Sequence[str]) -> ScanResult:
        table = self.table
        type_seen = False
        required_seen = table.required is None

        for index, raw in enumerate(lines, start=1):
            line = trim(raw)
            if not is_meaningful(line):
                continue

            # 1. Declaration
            if table.declaration.matches(line):
                type_seen = True
                continue

            # 2. Line shapes
            matched = next((rule for rule in table.rules if rule.matches(line)), None)
            if matched is not None:
                if matched.name == table.required:
                    required_seen = True
                continue

            # 3. Structural markers (subgraph / end)
            if any(rule.matches(line) for rule in table.structural):
                continue

            return self._reject(
                ErrorKind.SYNTAX,
                f'Invalid {table.label} syntax: "{line}"',
                line=index,
                suggestion=table.syntax_hint,
            )

        if not type_seen:
            return self._reject(
                ErrorKind.NO_TYPE,
                f"Missing {table.label} declaration",
                line=1,
                suggestion=f'Add "{table.declaration_token}" at the beginning',
            )

        if not required_seen:
            return self._reject(
                ErrorKind.NO_DATA,
                table.missing_required_message or f"No {table.required} lines found",
                line=2,
                suggestion=table.missing_required_hint,
            )

        return self._accept()


def default_validators() -> list[BaseValidator]:
    """One validator per registered rule table, in detection order."""
    return [RuleTableValidator(table) for table in RULE_TABLES]
