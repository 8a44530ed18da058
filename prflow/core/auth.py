import asyncio
from typing import List

from prflow.core.ports.logger import Logger
from prflow.core.ports.source_control import SourceControl
from prflow.core.ports.ticket_tracker import TicketTracker
from prflow.core.schema.review import AuthStatus


class AuthProbe:
    """Checks both collaborators and classifies the run as full or degraded.

    The two checks run concurrently and both always complete; neither a
    ``False`` nor a raised error escapes ``probe``.
    """

    def __init__(
        self,
        source_control: SourceControl,
        tracker: TicketTracker,
        logger: Logger,
    ) -> None:
        self._source_control = source_control
        self._tracker = tracker
        self._logger = logger

    async def probe(self) -> AuthStatus:
        source_result, tracker_result = await asyncio.gather(
            self._source_control.auth_status(),
            self._tracker.auth_status(),
            return_exceptions=True,
        )
        diagnostics: List[str] = []
        source_ok = self._classify(
            "Source control",
            self._source_control.auth_hint,
            source_result,
            diagnostics,
        )
        tracker_ok = self._classify(
            "Ticket tracker",
            self._tracker.auth_hint,
            tracker_result,
            diagnostics,
        )
        return AuthStatus(
            source_control_ok=source_ok,
            tracker_ok=tracker_ok,
            diagnostics=tuple(diagnostics),
        )

    def _classify(
        self,
        label: str,
        hint: str,
        result: object,
        diagnostics: List[str],
    ) -> bool:
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            diagnostics.append(f"{label} status check failed: {result}")
            self._logger.warning(
                "Auth check failed",
                collaborator=label,
                error=str(result),
            )
            return False
        if result is True:
            self._logger.info("Auth check passed", collaborator=label)
            return True
        diagnostics.append(_not_authenticated(label, hint))
        self._logger.warning("Auth check negative", collaborator=label)
        return False


def _not_authenticated(label: str, hint: str) -> str:
    message = f"{label} not authenticated."
    if hint:
        message = f"{message} {hint}"
    return message

