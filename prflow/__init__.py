from prflow.core.pipeline import ReviewPipeline
from prflow.core.schema import Finding, PipelineState, ReviewOutcome, TicketInfo

__all__ = [
    "ReviewPipeline",
    "ReviewOutcome",
    "PipelineState",
    "Finding",
    "TicketInfo",
]
