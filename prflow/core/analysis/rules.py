from dataclasses import dataclass
from typing import Callable, Tuple

DEBUG_PRINT_MARKER = "console.log"
INLINE_COMMENT_MARKER = "//"
TYPED_SOURCE_SUFFIXES = (".ts", ".tsx")


@dataclass(frozen=True, slots=True)
class Rule:
    """A textual check applied to one added line.

    ``matches`` receives the file path and the added line with its ``+``
    marker and surrounding whitespace removed.
    """

    name: str
    comment: str
    matches: Callable[[str, str], bool]


def _is_debug_print(file_path: str, code: str) -> bool:
    return DEBUG_PRINT_MARKER in code and INLINE_COMMENT_MARKER not in code


def _is_todo(file_path: str, code: str) -> bool:
    return "TODO" in code or "FIXME" in code


def _is_untyped_any(file_path: str, code: str) -> bool:
    return ": any" in code and file_path.endswith(TYPED_SOURCE_SUFFIXES)


def _is_password_handling(file_path: str, code: str) -> bool:
    return "password" in code and "hash" not in code


# Only the current line is inspected for ``try``, so multi-line handlers are
# still reported.
def _is_unguarded_await(file_path: str, code: str) -> bool:
    return "await" in code and "try" not in code


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(
        name="debug-print",
        comment=f"Remove {DEBUG_PRINT_MARKER} before merging",
        matches=_is_debug_print,
    ),
    Rule(
        name="todo",
        comment="Address TODO/FIXME comment",
        matches=_is_todo,
    ),
    Rule(
        name="untyped-any",
        comment='Avoid "any" type, be more specific',
        matches=_is_untyped_any,
    ),
    Rule(
        name="password",
        comment="Ensure password handling is secure",
        matches=_is_password_handling,
    ),
    Rule(
        name="async-without-try",
        comment="Consider error handling for async operation",
        matches=_is_unguarded_await,
    ),
)
