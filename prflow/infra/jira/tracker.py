import re
from typing import Any, List, Mapping, Optional

from prflow.core.exceptions import TrackerError
from prflow.core.ports.logger import Logger
from prflow.core.ports.ticket_tracker import TicketTracker
from prflow.core.schema.ticket import TicketInfo
from prflow.infra.jira.client import JiraClient

NO_DESCRIPTION = "No description"
UNKNOWN_STATUS = "Unknown"

_ACCEPTANCE_CRITERIA_PATTERN = re.compile(
    r'\b(?:acceptance criteria|ac)\b[:\s]+(.*?)(?:\n|$)',
    re.IGNORECASE | re.DOTALL,
)


class JiraTicketTracker(TicketTracker):
    auth_hint = "Set JIRA_EMAIL and JIRA_API_TOKEN for the Jira site."

    def __init__(self, client: JiraClient, logger: Logger) -> None:
        self._client = client
        self._logger = logger

    async def auth_status(self) -> bool:
        if not self._client.has_credentials:
            self._logger.warning("Jira credentials missing")
            return False
        try:
            await self._client.get_myself()
        except TrackerError as error:
            self._logger.warning("Jira auth check failed", error=error.message)
            return False
        return True

    async def fetch_ticket(self, key: str) -> TicketInfo:
        payload = await self._client.get_issue(key)
        return self._to_ticket(key, payload)

    def browse_url(self, key: str) -> str:
        return f"{self._client.base_url}/browse/{key}"

    def _to_ticket(self, key: str, payload: Mapping[str, Any]) -> TicketInfo:
        fields = payload.get("fields") or {}
        status = fields.get("status") or {}
        description = fields.get("description")
        return TicketInfo(
            key=payload.get("key") or key,
            summary=fields.get("summary") or "",
            description=first_paragraph_text(description) or NO_DESCRIPTION,
            status=status.get("name") or UNKNOWN_STATUS,
            url=self.browse_url(key),
            acceptance_criteria=extract_acceptance_criteria(description),
        )


def first_paragraph_text(description: Any) -> Optional[str]:
    """Return the first text node of an Atlassian Document Format body.

    Plain-string descriptions (REST v2 payloads) are returned unchanged.
    """
    if isinstance(description, str):
        return description or None
    blocks = _content(description)
    if not blocks:
        return None
    items = _content(blocks[0])
    if not items:
        return None
    return items[0].get("text") or None


def extract_acceptance_criteria(description: Any) -> Optional[str]:
    text = _flatten(description)
    if not text:
        return None
    match = _ACCEPTANCE_CRITERIA_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def _flatten(description: Any) -> str:
    if isinstance(description, str):
        return description
    parts: List[str] = []
    for block in _content(description):
        parts.append(
            " ".join(item.get("text") or "" for item in _content(block))
        )
    return " ".join(parts)


def _content(node: Any) -> List[Mapping[str, Any]]:
    if not isinstance(node, Mapping):
        return []
    content = node.get("content")
    if not isinstance(content, list):
        return []
    return [item for item in content if isinstance(item, Mapping)]
