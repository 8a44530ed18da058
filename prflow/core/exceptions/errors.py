from datetime import datetime


class PRFlowError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(PRFlowError):
    pass


class SourceError(PRFlowError):
    pass


class SourceAuthenticationError(SourceError):
    pass


class SourceRateLimitError(SourceError):
    def __init__(self, message: str, retry_after: datetime) -> None:
        self.retry_after = retry_after
        super().__init__(message)


class SourceNotFoundError(SourceError):
    def __init__(self, message: str, resource: str) -> None:
        self.resource = resource
        super().__init__(message)


class PRFetchError(SourceError):
    def __init__(self, message: str, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(message)


class TrackerError(PRFlowError):
    pass


class TrackerAuthenticationError(TrackerError):
    pass


class TicketNotFoundError(TrackerError):
    def __init__(self, message: str, key: str) -> None:
        self.key = key
        super().__init__(message)
