"""Rule tables: the line grammar of every supported diagram dialect.

This is pure data. Each table pairs one declaration pattern with the named
line shapes a dialect accepts. The grammars are permissive approximations
and form a compatibility contract: changing a pattern changes which
diagrams are accepted.
"""

import re
from typing import Optional

from mermaid_validator.validators.models import Dialect

# Word and digit classes are spelled out as ASCII; \s matches Unicode whitespace
_FLAGS = 0
_FLAGS_I = re.IGNORECASE

# Leading and trailing whitespace, including a byte order mark
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


class LineRule:
    """A named predicate over a single trimmed line."""

    __slots__ = ("name", "pattern")

    def __init__(self, name: str, pattern: str, flags: int = _FLAGS_I):
        self.name = name
        self.pattern = re.compile(pattern, flags)

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None

    def __repr__(self) -> str:
        return f"LineRule({self.name!r}, {self.pattern.pattern!r})"


class RuleTable:
    """Grammar of one dialect.

    Attributes:
        dialect: Dialect this table describes
        label: Name used in error messages ("Invalid <label> syntax")
        declaration: Rule matching the diagram type line
        rules: Line shapes accepted after the declaration
        structural: Section open/close markers, checked after `rules`
        required: Name of a rule that must match at least once
        syntax_hint: Suggestion attached to a rejected line
        declaration_token: Token named in the missing-declaration hint
        missing_required_message / missing_required_hint: Reported when
            `required` never matched
    """

    def __init__(
        self,
        dialect: Dialect,
        declaration: LineRule,
        rules: tuple[LineRule, ...],
        syntax_hint: str,
        declaration_token: str,
        structural: tuple[LineRule, ...] = (),
        required: Optional[str] = None,
        missing_required_message: Optional[str] = None,
        missing_required_hint: Optional[str] = None,
    ):
        self.dialect = dialect
        self.label = dialect.value
        self.declaration = declaration
        self.rules = rules
        self.structural = structural
        self.required = required
        self.syntax_hint = syntax_hint
        self.declaration_token = declaration_token
        self.missing_required_message = missing_required_message
        self.missing_required_hint = missing_required_hint

    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules + self.structural]

    def __repr__(self) -> str:
        return f"RuleTable({self.label!r}, rules={self.rule_names()})"


# ──────────────────────────────────────────────────────────────────────
# FLOWCHART
# ──────────────────────────────────────────────────────────────────────

FLOWCHART = RuleTable(
    dialect=Dialect.FLOWCHART,
    declaration=LineRule("declaration", r"^(graph|flowchart)\s*(TB|TD|BT|RL|LR)?\s*$"),
    rules=(
        # Nodes, edges and edge labels share one character-set shape
        LineRule("statement", r"""^\s*[A-Za-z0-9_\s\[\](){}<>"':|+\-*/\\.,\->]+\s*$""", _FLAGS),
    ),
    structural=(
        LineRule("subgraph_open", r"^subgraph", _FLAGS),
        # No depth tracking: a stray "end" is accepted
        LineRule("subgraph_close", r"^end\s*$", _FLAGS),
    ),
    syntax_hint="Check graph syntax. Valid formats: A[Text], A --> B, subgraph Title",
    declaration_token="graph TD",
)


# ──────────────────────────────────────────────────────────────────────
# SEQUENCE
# ──────────────────────────────────────────────────────────────────────

SEQUENCE = RuleTable(
    dialect=Dialect.SEQUENCE,
    declaration=LineRule("declaration", r"^sequenceDiagram\s*$"),
    rules=(
        LineRule("keyword", r"^\s*(participant|loop|alt|else|end|note|actor)(?![A-Za-z0-9_]).*$"),
        LineRule(
            "message",
            r"^\s*[A-Za-z0-9_]+\s*(->>|-->>|-->|--->|->|-->|x|--x)\s*[A-Za-z0-9_]+.*$",
        ),
    ),
    syntax_hint="Check sequence diagram syntax. Valid formats: A->>B: Message, participant A as Alice",
    declaration_token="sequenceDiagram",
)


# ──────────────────────────────────────────────────────────────────────
# CLASS
# ──────────────────────────────────────────────────────────────────────

CLASS = RuleTable(
    dialect=Dialect.CLASS,
    declaration=LineRule("declaration", r"^classDiagram\s*$"),
    rules=(
        LineRule("declaration_block", r"^\s*(class|interface|enum)(?![A-Za-z0-9_]).*$"),
        LineRule(
            "relation",
            r"^\s*[A-Za-z0-9_]+\s*(--|\.\.\.|<\|--|\*--|o--|\|\.\.\.)\s*[A-Za-z0-9_]+.*$",
        ),
        LineRule("member", r"^\s*[+\-#~]?\s*[A-Za-z0-9_]+(\(\))?\s*[:{].*$"),
    ),
    syntax_hint="Check class diagram syntax. Valid formats: class ClassName, A <|-- B, name : Type",
    declaration_token="classDiagram",
)


# ──────────────────────────────────────────────────────────────────────
# STATE
# ──────────────────────────────────────────────────────────────────────

STATE = RuleTable(
    dialect=Dialect.STATE,
    declaration=LineRule("declaration", r"^stateDiagram(-v2)?\s*$"),
    rules=(
        LineRule("entry", r"^\s*\[*\]*\s*-->\s*[A-Za-z0-9_]+.*$"),
        LineRule("transition", r"^\s*[A-Za-z0-9_]+\s*-->\s*\[*\]*.*$"),
        LineRule("initial", r"^\s*\[\*\]\s*-->\s*[A-Za-z0-9_]+.*$"),
        LineRule("final", r"^\s*[A-Za-z0-9_]+\s*-->\s*\[\*\].*$"),
    ),
    syntax_hint="Check state diagram syntax. Valid formats: [*] --> State, State1 --> State2",
    declaration_token="stateDiagram-v2",
)


# ──────────────────────────────────────────────────────────────────────
# ENTITY-RELATIONSHIP
# ──────────────────────────────────────────────────────────────────────

ER = RuleTable(
    dialect=Dialect.ER,
    declaration=LineRule("declaration", r"^erDiagram\s*$"),
    rules=(
        LineRule("entity_open", r"^\s*[A-Za-z0-9_]+\s*\{.*$"),
        LineRule("attribute", r"^\s*[A-Za-z0-9_]+\s*:\s*[A-Za-z0-9_]+.*$"),
        LineRule(
            "relationship",
            r"^\s*[A-Za-z0-9_]+\s*(\|\||\{o|o\||\}o|o\{|\|\}|\}\||\{\{)\s*[A-Za-z0-9_]+.*$",
        ),
        LineRule("entity_close", r"^\s*\}\s*$"),
    ),
    syntax_hint="Check ER diagram syntax. Valid formats: ENTITY {, name : type, }",
    declaration_token="erDiagram",
)


# ──────────────────────────────────────────────────────────────────────
# GANTT
# ──────────────────────────────────────────────────────────────────────

GANTT = RuleTable(
    dialect=Dialect.GANTT,
    declaration=LineRule("declaration", r"^gantt\s*$"),
    rules=(
        LineRule("directive", r"^\s*(title|dateFormat|section)(?![A-Za-z0-9_]).*$"),
        LineRule("task", r"^\s*[A-Za-z0-9_]+\s*:\s*.*$"),
    ),
    syntax_hint="Check Gantt chart syntax. Valid formats: title Text, section Name, Task :id, date, duration",
    declaration_token="gantt",
)


# ──────────────────────────────────────────────────────────────────────
# JOURNEY
# ──────────────────────────────────────────────────────────────────────

JOURNEY = RuleTable(
    dialect=Dialect.JOURNEY,
    declaration=LineRule("declaration", r"^journey\s*$"),
    rules=(
        LineRule("directive", r"^\s*(title|section)(?![A-Za-z0-9_]).*$"),
        LineRule("task", r"^\s*[^:]+:\s*[0-9]+\s*:\s*[A-Za-z0-9_]+.*$"),
    ),
    syntax_hint="Check journey diagram syntax. Valid formats: title Text, section Name, Task: score: User",
    declaration_token="journey",
)


# ──────────────────────────────────────────────────────────────────────
# PIE
# ──────────────────────────────────────────────────────────────────────

PIE = RuleTable(
    dialect=Dialect.PIE,
    declaration=LineRule("declaration", r"^pie\s*(title\s+.+)?\s*$"),
    rules=(
        LineRule("data", r'^\s*"[^"]+"\s*:\s*[0-9]+\s*$'),
    ),
    syntax_hint='Check pie chart syntax. Valid formats: "Label" : value',
    declaration_token="pie",
    required="data",
    missing_required_message="No data found in pie chart",
    missing_required_hint='Add data in format: "Label" : value',
)


# ──────────────────────────────────────────────────────────────────────
# GIT GRAPH
# ──────────────────────────────────────────────────────────────────────

GIT_GRAPH = RuleTable(
    dialect=Dialect.GIT_GRAPH,
    declaration=LineRule("declaration", r"^gitGraph\s*$"),
    rules=(
        LineRule("command", r"^\s*(commit|branch|checkout|merge|cherry-pick)(?![A-Za-z0-9_]).*$"),
    ),
    syntax_hint="Check Git graph syntax. Valid formats: commit, branch name, checkout name, merge name",
    declaration_token="gitGraph",
)


# ──────────────────────────────────────────────────────────────────────
# MIND MAP
# ──────────────────────────────────────────────────────────────────────

MINDMAP = RuleTable(
    dialect=Dialect.MINDMAP,
    declaration=LineRule("declaration", r"^mindmap\s*$"),
    rules=(
        LineRule("node", r"^\s*[+\-*].*$"),
    ),
    syntax_hint="Check mind map syntax. Use indentation and +, -, or * for hierarchy",
    declaration_token="mindmap",
)


# Detection order. The first declaration that matches wins.
RULE_TABLES: tuple[RuleTable, ...] = (
    FLOWCHART,
    SEQUENCE,
    CLASS,
    STATE,
    ER,
    GANTT,
    JOURNEY,
    PIE,
    GIT_GRAPH,
    MINDMAP,
)

RULE_TABLES_BY_DIALECT: dict[Dialect, RuleTable] = {table.dialect: table for table in RULE_TABLES}

COMMENT_MARKER = "%%"


def trim(line: str) -> str:
    """Strip surrounding whitespace and byte order marks."""
    return _EDGE_SPACE.sub("", line)


def is_meaningful(line: str) -> bool:
    """True for lines that are neither blank nor a %% comment."""
    stripped = trim(line)
    return bool(stripped) and not stripped.startswith(COMMENT_MARKER)
