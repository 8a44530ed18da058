from typing import Protocol, runtime_checkable

from prflow.core.schema.pr import PRInfo


@runtime_checkable
class SourceControl(Protocol):
    auth_hint: str

    async def auth_status(self) -> bool:
        """Report whether the collaborator is reachable and authenticated.

        Implementations must not raise; any failure is reported as ``False``.
        """
        ...

    async def fetch_pr(self, identifier: str) -> PRInfo:
        ...
