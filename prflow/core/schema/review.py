from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from prflow.core.schema.ticket import TicketInfo


class PipelineState(Enum):
    START = "start"
    AUTH_CHECKED = "auth_checked"
    PR_FETCHED = "pr_fetched"
    TICKET_RESOLVED = "ticket_resolved"
    ANALYZED = "analyzed"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Finding:
    file: str
    line: int
    comment: str


@dataclass(frozen=True, slots=True)
class AuthStatus:
    source_control_ok: bool
    tracker_ok: bool
    diagnostics: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReviewOutcome:
    state: PipelineState
    text: str
    progress: Tuple[str, ...]
    ticket: Optional[TicketInfo] = None
    findings: Tuple[Finding, ...] = ()
    transitions: Tuple[PipelineState, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.DONE
