from prflow.core.analysis.diff import (
    AddedLine,
    analyze,
    changed_lines,
    parse_added_lines,
)
from prflow.core.analysis.rules import DEFAULT_RULES, Rule

__all__ = [
    "AddedLine",
    "Rule",
    "DEFAULT_RULES",
    "analyze",
    "changed_lines",
    "parse_added_lines",
]
