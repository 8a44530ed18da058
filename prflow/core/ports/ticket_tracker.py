from typing import Protocol, runtime_checkable

from prflow.core.schema.ticket import TicketInfo


@runtime_checkable
class TicketTracker(Protocol):
    auth_hint: str

    async def auth_status(self) -> bool:
        ...

    async def fetch_ticket(self, key: str) -> TicketInfo:
        ...

    def browse_url(self, key: str) -> str:
        ...
