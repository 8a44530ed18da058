import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from prflow.core.analysis.rules import DEFAULT_RULES, Rule
from prflow.core.schema.review import Finding

FILE_HEADER_PREFIX = "diff --git"
NEW_FILE_PREFIX = "+++"
HUNK_PREFIX = "@@"
ADDED_PREFIX = "+"
DEV_NULL = "/dev/null"

_FILE_HEADER_PATH = re.compile(r' b/(.+)$')
_HUNK_NEW_START = re.compile(r'\+(\d+)')


@dataclass(frozen=True, slots=True)
class AddedLine:
    file: str
    line: int
    text: str


@dataclass(frozen=True, slots=True)
class _Cursor:
    file: str = ""
    line: Optional[int] = None


def _step(cursor: _Cursor, raw: str) -> Tuple[_Cursor, Optional[AddedLine]]:
    if raw.startswith(FILE_HEADER_PREFIX):
        match = _FILE_HEADER_PATH.search(raw)
        return _Cursor(file=match.group(1) if match else ""), None

    if raw.startswith(NEW_FILE_PREFIX):
        path = raw[len(NEW_FILE_PREFIX):].strip()
        starts_file = cursor.line is None or path.startswith("b/")
        if not starts_file or not path or path == DEV_NULL:
            return cursor, None
        return _Cursor(file=path[2:] if path.startswith("b/") else path), None

    if raw.startswith(HUNK_PREFIX):
        match = _HUNK_NEW_START.search(raw)
        return _Cursor(cursor.file, int(match.group(1)) if match else 0), None

    if raw.startswith(ADDED_PREFIX):
        added = AddedLine(cursor.file, cursor.line or 0, raw[len(ADDED_PREFIX):])
        if cursor.line is None:
            return cursor, added
        return _Cursor(cursor.file, cursor.line + 1), added

    return cursor, None


def parse_added_lines(diff: str) -> Tuple[AddedLine, ...]:
    """Return every added line of a unified diff with its post-image number.

    Only added lines advance the line cursor. Added lines seen before any hunk
    header of their file are numbered 0, and a hunk header without a ``+start``
    token restarts numbering at 0.
    """
    cursor = _Cursor()
    added: List[AddedLine] = []
    for raw in diff.split("\n"):
        cursor, line = _step(cursor, raw)
        if line is not None:
            added.append(line)
    return tuple(added)


def changed_lines(diff: str) -> Mapping[str, Tuple[int, ...]]:
    lines: Dict[str, List[int]] = {}
    for added in parse_added_lines(diff):
        lines.setdefault(added.file, []).append(added.line)
    return {path: tuple(numbers) for path, numbers in lines.items()}


def analyze(diff: str, rules: Sequence[Rule] = DEFAULT_RULES) -> Tuple[Finding, ...]:
    findings: List[Finding] = []
    for added in parse_added_lines(diff):
        code = added.text.strip()
        for rule in rules:
            if rule.matches(added.file, code):
                findings.append(
                    Finding(file=added.file, line=added.line, comment=rule.comment)
                )
    return tuple(findings)
