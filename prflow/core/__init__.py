from prflow.core.analysis import analyze
from prflow.core.auth import AuthProbe
from prflow.core.identifiers import (
    extract_ticket_key,
    find_ticket_key,
    normalize_pr_ref,
)
from prflow.core.pipeline import ReviewPipeline
from prflow.core.report import render_report

__all__ = [
    "AuthProbe",
    "ReviewPipeline",
    "analyze",
    "extract_ticket_key",
    "find_ticket_key",
    "normalize_pr_ref",
    "render_report",
]
