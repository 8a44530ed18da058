from prflow.core.exceptions.errors import (
    ConfigurationError,
    PRFetchError,
    PRFlowError,
    SourceAuthenticationError,
    SourceError,
    SourceNotFoundError,
    SourceRateLimitError,
    TicketNotFoundError,
    TrackerAuthenticationError,
    TrackerError,
)

__all__ = [
    "PRFlowError",
    "ConfigurationError",
    "SourceError",
    "SourceAuthenticationError",
    "SourceRateLimitError",
    "SourceNotFoundError",
    "PRFetchError",
    "TrackerError",
    "TrackerAuthenticationError",
    "TicketNotFoundError",
]
