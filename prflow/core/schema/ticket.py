from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class TicketInfo:
    key: str
    summary: str
    description: str
    status: str
    url: str
    acceptance_criteria: Optional[str] = None
