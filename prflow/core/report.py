from typing import List, Optional, Sequence

from prflow.core.schema.review import Finding
from prflow.core.schema.ticket import TicketInfo


def render_report(
    pr_label: str,
    ticket: Optional[TicketInfo],
    findings: Sequence[Finding],
) -> str:
    """Render the review as Markdown.

    Sections without data are left out entirely; output depends only on the
    arguments.
    """
    parts = [f"# Code Review: {pr_label}\n\n"]
    if ticket is not None:
        parts.append(_render_ticket(ticket))
    if findings:
        parts.append(_render_findings(findings))
    return "".join(parts)


def _render_ticket(ticket: TicketInfo) -> str:
    lines: List[str] = [f"## Ticket: {ticket.key}\n"]
    fields = (
        ("Summary", ticket.summary),
        ("Status", ticket.status),
        ("Description", ticket.description),
        ("Acceptance Criteria", ticket.acceptance_criteria),
        ("URL", ticket.url),
    )
    for label, value in fields:
        if value:
            lines.append(f"**{label}:** {value}\n")
    lines.append("\n")
    return "".join(lines)


def _render_findings(findings: Sequence[Finding]) -> str:
    lines: List[str] = ["## Review Comments\n\n"]
    for finding in findings:
        location = f"{finding.file}:{finding.line}" if finding.line else finding.file
        lines.append(f"- {location}\n  {finding.comment}\n\n")
    return "".join(lines)
