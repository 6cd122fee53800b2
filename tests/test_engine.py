from typing import Sequence

import pytest
from pydantic import ValidationError

from mermaid_validator.validators import (
    BatchDiagnostic,
    Diagnostic,
    Dialect,
    ErrorKind,
    ValidationEngine,
    validation_engine,
)
from mermaid_validator.validators.base import BaseValidator
from mermaid_validator.validators.classifier import SUGGESTIONS
from mermaid_validator.validators.models import ScanResult
from tests._diagrams import FLOWCHART, PIE, SEQUENCE, VALID_DIAGRAMS


class _ExplodingValidator(BaseValidator):
    def __init__(self, message: str = "rule table corrupted"):
        self.message = message

    @property
    def dialect(self) -> Dialect:
        return Dialect.FLOWCHART

    def validate(self, lines: Sequence[str]) -> ScanResult:
        raise RuntimeError(self.message)


def _assert_no_error_fields(diagnostic: Diagnostic) -> None:
    assert diagnostic.error is None
    assert diagnostic.type is None
    assert diagnostic.line is None
    assert diagnostic.suggestion is None


# ── Valid diagrams ──


@pytest.mark.parametrize(("dialect", "code"), sorted(VALID_DIAGRAMS.items()))
def test_valid_diagrams_of_every_dialect(engine: ValidationEngine, dialect: str, code: str) -> None:
    diagnostic = engine.validate(code)

    assert diagnostic.is_valid is True, diagnostic.error
    assert diagnostic.diagram_type == dialect
    _assert_no_error_fields(diagnostic)
    assert diagnostic.processing_time >= 0


def test_flowchart_scenario(engine: ValidationEngine) -> None:
    diagnostic = engine.validate(FLOWCHART)

    assert diagnostic.is_valid is True
    assert diagnostic.diagram_type == "graph"
    assert diagnostic.element_count == 5


def test_sequence_scenario(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("sequenceDiagram\n    A->>B: Hello")

    assert diagnostic.is_valid is True
    assert diagnostic.diagram_type == "sequence"
    assert diagnostic.element_count == 2


def test_byte_order_mark_is_trimmed(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("\ufeffgraph TD\n  A --> B")

    assert diagnostic.is_valid is True
    assert diagnostic.diagram_type == "graph"
    assert diagnostic.element_count == 2


@pytest.mark.parametrize(
    "code",
    [
        "graph TD\n  A\u00a0-->\u00a0B",
        'pie title\u00a0Pets\n  "Dogs" : 3',
        "sequenceDiagram\n  A->>B:\u2003Hello\u3000",
    ],
)
def test_unicode_whitespace_inside_lines(engine: ValidationEngine, code: str) -> None:
    assert engine.validate(code).is_valid is True


def test_pie_scenario(engine: ValidationEngine) -> None:
    diagnostic = engine.validate('pie title Pets\n    "Dogs" : 386')

    assert diagnostic.is_valid is True
    assert diagnostic.diagram_type == "pie"


def test_flowchart_subgraph_end_is_not_depth_checked(engine: ValidationEngine) -> None:
    code = "graph TD\nsubgraph one\n  A --> B\nend\nend"

    assert engine.validate(code).is_valid is True


def test_repeated_declaration_is_accepted(engine: ValidationEngine) -> None:
    assert engine.validate("graph TD\ngraph LR\nA --> B").is_valid is True


def test_windows_line_endings_are_trimmed(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("graph TD\r\n  A --> B\r\n")

    assert diagnostic.is_valid is True
    assert diagnostic.element_count == 2


# ── Input errors ──


@pytest.mark.parametrize("bad_input", ["", None, 42, ["graph TD"], b"graph TD"])
def test_empty_or_non_text_input(engine: ValidationEngine, bad_input) -> None:
    diagnostic = engine.validate(bad_input)

    assert diagnostic.is_valid is False
    assert diagnostic.type == "input_error"
    assert diagnostic.error == "Diagram code must be a non-empty string"
    assert diagnostic.line is None
    assert diagnostic.suggestion is None
    assert diagnostic.processing_time == 0
    assert diagnostic.diagram_type == "unknown"
    assert diagnostic.element_count == 0


# ── Missing diagram type ──


def test_missing_declaration(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("A --> B\n    B --> C")

    assert diagnostic.is_valid is False
    assert diagnostic.type == "no_type"
    assert diagnostic.line == 1
    assert diagnostic.error == "No valid diagram type detected"
    assert diagnostic.suggestion == SUGGESTIONS[ErrorKind.NO_TYPE]
    assert diagnostic.diagram_type == "unknown"
    assert diagnostic.element_count == 0


@pytest.mark.parametrize("code", ["   ", "\n\n", "%% just a comment"])
def test_whitespace_or_comment_only_is_no_type(engine: ValidationEngine, code: str) -> None:
    diagnostic = engine.validate(code)

    assert diagnostic.type == "no_type"
    assert diagnostic.diagram_type == "unknown"


# ── Pie data requirement ──


def test_pie_without_data(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("pie title Pets")

    assert diagnostic.is_valid is False
    assert diagnostic.type == "no_data"
    assert diagnostic.line == 2
    assert diagnostic.error == "No data found in pie chart"
    assert diagnostic.suggestion == 'Add data in format: "Label" : value'
    assert diagnostic.diagram_type == "pie"
    assert diagnostic.element_count == 1


def test_pie_with_only_comments_after_declaration(engine: ValidationEngine) -> None:
    assert engine.validate("pie\n%% \"Dogs\" : 3").type == "no_data"


# ── Syntax errors and fail-fast ──


def test_syntax_error_reports_line_and_quoted_text(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("sequenceDiagram\n    A->>B: Hello\n    B-:A: Broken arrow")

    assert diagnostic.is_valid is False
    assert diagnostic.type == "syntax"
    assert diagnostic.line == 3
    assert diagnostic.error == 'Invalid sequence syntax: "B-:A: Broken arrow"'
    assert diagnostic.suggestion.startswith("Check sequence diagram syntax")
    assert diagnostic.diagram_type == "sequence"


def test_syntax_error_stops_at_first_offending_line(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("graph TD\n  A --> B;\n  C ==> D")

    assert diagnostic.line == 2
    assert diagnostic.error == 'Invalid graph syntax: "A --> B;"'


def test_line_numbers_count_blank_and_comment_lines(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("graph TD\n\n%% a note\n  A --> B;")

    assert diagnostic.line == 4


def test_element_count_is_computed_over_raw_input_on_failure(engine: ValidationEngine) -> None:
    diagnostic = engine.validate("graph TD\n  A --> B;\n  C --> D\n%% tail")

    assert diagnostic.is_valid is False
    assert diagnostic.element_count == 3


def test_class_member_rules_are_permissive(engine: ValidationEngine) -> None:
    code = "classDiagram\n    class Test {\n        +invalidProperty::\n    }"
    diagnostic = engine.validate(code)

    # "+invalidProperty::" passes the member shape; the closing brace does not
    assert diagnostic.type == "syntax"
    assert diagnostic.line == 4


def test_comment_lines_are_transparent(engine: ValidationEngine) -> None:
    plain = "graph TD\n  A --> B\n  B --> C;"
    commented = "%% header\ngraph TD\n%% between\n  A --> B\n  %% indented\n  B --> C;"

    first = engine.validate(plain)
    second = engine.validate(commented)

    assert first.is_valid is second.is_valid is False
    assert first.diagram_type == second.diagram_type == "graph"
    assert first.error == second.error
    assert first.element_count == second.element_count == 3


# ── Determinism ──


@pytest.mark.parametrize("code", [FLOWCHART, "pie title Pets", "nope", "graph TD\nA --> B;"])
def test_validate_is_idempotent(engine: ValidationEngine, code: str) -> None:
    assert engine.validate(code).comparable() == engine.validate(code).comparable()


# ── Batch ──


def test_batch_preserves_order_and_matches_single_validation(engine: ValidationEngine) -> None:
    diagrams = [FLOWCHART, "A --> B", None, "pie title Pets", SEQUENCE, ""]
    results = engine.validate_batch(diagrams)

    assert [r.index for r in results] == list(range(len(diagrams)))
    assert all(isinstance(r, BatchDiagnostic) for r in results)
    for result, code in zip(results, diagrams):
        expected = engine.validate(code).comparable()
        assert result.model_dump(exclude={"processing_time", "index"}) == expected


def test_batch_does_not_stop_on_failures(engine: ValidationEngine) -> None:
    results = engine.validate_batch(["nope", "graph TD\nA --> B;", PIE])

    assert [r.is_valid for r in results] == [False, False, True]


def test_empty_batch(engine: ValidationEngine) -> None:
    assert engine.validate_batch([]) == []


# ── Real-time ──


def test_realtime_valid_message(engine: ValidationEngine) -> None:
    result = engine.validate_realtime(FLOWCHART, change_type="add", line_number=3)

    assert result.is_valid is True
    assert result.realtime is True
    assert result.change_type == "add"
    assert result.line_number == 3
    assert result.message == "Valid graph diagram (5 elements)"
    assert result.timestamp.tzinfo is not None


def test_realtime_invalid_message_includes_line_and_hint(engine: ValidationEngine) -> None:
    result = engine.validate_realtime("pie title Pets", change_type="modify")

    assert result.is_valid is False
    assert result.line_number is None
    assert result.message == (
        'No data found in pie chart (line 2)\nHint: Add data in format: "Label" : value'
    )


def test_realtime_input_error_message_has_no_line(engine: ValidationEngine) -> None:
    result = engine.validate_realtime("", change_type="full")

    assert result.message == "Diagram code must be a non-empty string"


def test_realtime_rejects_unknown_change_type(engine: ValidationEngine) -> None:
    with pytest.raises(ValidationError):
        engine.validate_realtime(FLOWCHART, change_type="rename")


# ── Defensive branches ──


def test_unregistered_dialect_is_unsupported() -> None:
    engine = ValidationEngine()
    engine.remove_validator(Dialect.PIE)

    diagnostic = engine.validate(PIE)

    assert diagnostic.is_valid is False
    assert diagnostic.type == "unsupported"
    assert diagnostic.error == "Unsupported diagram type: pie"
    assert diagnostic.line == 1
    assert diagnostic.diagram_type == "pie"


def test_internal_fault_becomes_general_diagnostic() -> None:
    engine = ValidationEngine()
    engine.add_validator(_ExplodingValidator())

    diagnostic = engine.validate(FLOWCHART)

    assert diagnostic.is_valid is False
    assert diagnostic.type == "general"
    assert diagnostic.error == "rule table corrupted"
    assert diagnostic.line is None
    assert diagnostic.suggestion == SUGGESTIONS[ErrorKind.GENERAL]
    assert diagnostic.diagram_type == "graph"
    assert diagnostic.element_count == 0

    # Other dialects keep working
    assert engine.validate(SEQUENCE).is_valid is True


def test_internal_fault_reports_line_from_message() -> None:
    engine = ValidationEngine()
    engine.add_validator(_ExplodingValidator("rule failed on line 3"))

    diagnostic = engine.validate(FLOWCHART)

    assert diagnostic.type == "general"
    assert diagnostic.error == "rule failed on line 3"
    assert diagnostic.line == 3


def test_internal_fault_ignores_line_zero() -> None:
    engine = ValidationEngine()
    engine.add_validator(_ExplodingValidator("bad offset at line 0"))

    assert engine.validate(FLOWCHART).line is None


def test_custom_validator_list() -> None:
    engine = ValidationEngine(validators=[])

    assert engine.validate(FLOWCHART).type == "unsupported"
    assert engine.stats().dialects == []


# ── Stats and listings ──


def test_supported_types() -> None:
    assert validation_engine.supported_types() == [
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
    ]


def test_stats_snapshot(engine: ValidationEngine) -> None:
    stats = engine.stats()

    assert stats.is_initialized is True
    assert stats.supported_types == 11
    assert stats.validation_type == "regex-based"
    assert stats.dialects[0] == "graph"
    assert len(stats.dialects) == 10


# ── Diagnostic model ──


def test_diagnostic_serializes_with_camel_case_keys(engine: ValidationEngine) -> None:
    payload = engine.validate("A --> B").model_dump(by_alias=True)

    assert set(payload) == {
        "isValid",
        "error",
        "type",
        "line",
        "suggestion",
        "processingTime",
        "diagramType",
        "elementCount",
    }
    assert payload["type"] == "no_type"


def test_valid_diagnostic_cannot_carry_error_fields() -> None:
    with pytest.raises(ValidationError):
        Diagnostic(is_valid=True, error="boom")


def test_invalid_diagnostic_needs_a_message() -> None:
    with pytest.raises(ValidationError):
        Diagnostic(is_valid=False, type=ErrorKind.SYNTAX)


def test_diagnostic_is_frozen(engine: ValidationEngine) -> None:
    diagnostic = engine.validate(FLOWCHART)

    with pytest.raises(ValidationError):
        diagnostic.is_valid = False
