from prflow.core.schema.pr import PRInfo
from prflow.core.schema.review import (
    AuthStatus,
    Finding,
    PipelineState,
    ReviewOutcome,
)
from prflow.core.schema.stage import Fatal, Ok, SoftDegraded, StageResult
from prflow.core.schema.ticket import TicketInfo

__all__ = [
    "PRInfo",
    "TicketInfo",
    "Finding",
    "AuthStatus",
    "PipelineState",
    "ReviewOutcome",
    "Ok",
    "SoftDegraded",
    "Fatal",
    "StageResult",
]
