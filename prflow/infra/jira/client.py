from typing import Any, Dict, Optional

import httpx

from prflow.core.exceptions import (
    TicketNotFoundError,
    TrackerAuthenticationError,
    TrackerError,
)

API_PREFIX = "/rest/api/3"
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class JiraClient:
    """Thin async wrapper over the Jira Cloud REST API (v3)."""

    def __init__(
        self,
        *,
        base_url: str,
        email: Optional[str],
        api_token: Optional[str],
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._has_credentials = bool(email and api_token)
        self._owns_client = client is None
        if client is None:
            auth = (email, api_token) if self._has_credentials else None
            client = httpx.AsyncClient(
                base_url=self._base_url,
                auth=auth,
                timeout=timeout,
                headers=DEFAULT_HEADERS,
            )
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_credentials(self) -> bool:
        return self._has_credentials

    async def get_myself(self) -> Dict[str, Any]:
        return await self._get(f"{API_PREFIX}/myself")

    async def get_issue(self, key: str) -> Dict[str, Any]:
        try:
            return await self._get(f"{API_PREFIX}/issue/{key}")
        except _NotFound as error:
            raise TicketNotFoundError(f"Ticket {key} not found", key) from error

    async def _get(self, path: str) -> Dict[str, Any]:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as error:
            raise TrackerError(f"Jira request to {path} failed: {error}") from error

        if response.status_code in (401, 403):
            raise TrackerAuthenticationError(
                f"Jira rejected credentials with status {response.status_code}"
            )
        if response.status_code == 404:
            raise _NotFound(f"Jira resource {path} not found")
        if response.status_code >= 400:
            raise TrackerError(
                f"Jira responded with status {response.status_code} for {path}"
            )
        try:
            return response.json()
        except ValueError as error:
            raise TrackerError(f"Jira returned invalid JSON for {path}") from error

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "JiraClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.aclose()


class _NotFound(TrackerError):
    pass
