from prflow.core.ports.logger import Logger
from prflow.core.ports.source_control import SourceControl
from prflow.core.ports.ticket_tracker import TicketTracker

__all__ = [
    "Logger",
    "SourceControl",
    "TicketTracker",
]
