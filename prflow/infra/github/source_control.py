import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Mapping, NoReturn, Optional

from github import GithubException
from github.Repository import Repository

from prflow.core.exceptions import (
    PRFetchError,
    SourceAuthenticationError,
    SourceError,
    SourceNotFoundError,
    SourceRateLimitError,
)
from prflow.core.ports.logger import Logger
from prflow.core.ports.source_control import SourceControl
from prflow.core.schema.pr import PRInfo
from prflow.infra.github.client import GitHubClient

STATUS_ALL = "all"
STATUS_ADDED = "added"
STATUS_REMOVED = "removed"
DEV_NULL = "/dev/null"


class GitHubSourceControl(SourceControl):
    """Source control backed by the GitHub REST API through PyGithub.

    PyGithub is blocking, so every call runs in a worker thread. The diff of
    a pull request is rebuilt as a unified diff from its per-file patches.
    """

    auth_hint = "Set GITHUB_TOKEN to a token with read access to the repository."

    def __init__(
        self,
        client: GitHubClient,
        owner: str,
        repo: str,
        logger: Logger,
    ) -> None:
        self._client = client
        self._owner = owner
        self._repo_name = repo
        self._logger = logger

    async def auth_status(self) -> bool:
        if not self._client.has_token:
            self._logger.warning("GitHub token missing")
            return False
        try:
            login = await asyncio.to_thread(self._client.get_login)
        except Exception as error:  # noqa: BLE001
            self._logger.warning("GitHub auth check failed", error=str(error))
            return False
        self._logger.debug("GitHub authenticated", login=login)
        return True

    async def fetch_pr(self, identifier: str) -> PRInfo:
        return await asyncio.to_thread(self._fetch_pr, identifier)

    def _fetch_pr(self, identifier: str) -> PRInfo:
        repo = self._get_repo()
        pr = self._find_pull(repo, identifier)
        try:
            files = list(pr.get_files())
            diff = "".join(self._to_file_diff(file) for file in files)
            return PRInfo(
                title=pr.title or "",
                body=pr.body or "",
                head_branch=pr.head.ref if pr.head else "",
                diff=diff,
            )
        except GithubException as error:
            raise PRFetchError(
                "Failed to fetch pull request details",
                identifier,
            ) from error

    def _find_pull(self, repo: Repository, identifier: str):
        resource = f"{self._owner}/{self._repo_name}#{identifier}"
        try:
            if identifier.isdigit():
                return repo.get_pull(int(identifier))
            pulls = repo.get_pulls(
                state=STATUS_ALL,
                head=f"{self._owner}:{identifier}",
            )
            for pr in pulls:
                return pr
        except GithubException as error:
            _translate_exception(
                "Failed to fetch pull request",
                error,
                resource=resource,
            )
        raise SourceNotFoundError(
            f"No pull request found for branch {identifier}",
            resource,
        )

    def _to_file_diff(self, file) -> str:
        previous = file.previous_filename or file.filename
        lines: List[str] = [f"diff --git a/{previous} b/{file.filename}"]
        if file.patch is None:
            lines.append(f"Binary files a/{previous} and b/{file.filename} differ")
            return "\n".join(lines) + "\n"
        old_path = DEV_NULL if file.status == STATUS_ADDED else f"a/{previous}"
        new_path = DEV_NULL if file.status == STATUS_REMOVED else f"b/{file.filename}"
        lines.append(f"--- {old_path}")
        lines.append(f"+++ {new_path}")
        lines.append(file.patch)
        return "\n".join(lines) + "\n"

    def _get_repo(self) -> Repository:
        try:
            return self._client.get_repo(self._owner, self._repo_name)
        except GithubException as error:
            _translate_exception(
                "Failed to access repository",
                error,
                resource=f"{self._owner}/{self._repo_name}",
            )


def _translate_exception(
    message: str,
    error: GithubException,
    resource: str,
) -> NoReturn:
    if error.status == 401:
        raise SourceAuthenticationError(message) from error
    if error.status == 404:
        raise SourceNotFoundError(message, resource) from error
    if error.status in (403, 429):
        retry_after = _retry_after(error.headers or {})
        if retry_after is not None:
            raise SourceRateLimitError(message, retry_after) from error
    raise SourceError(f"{message} (HTTP {error.status})") from error


def _retry_after(headers: Mapping[str, str]) -> Optional[datetime]:
    """Read GitHub's secondary (``Retry-After`` seconds) or primary
    (``X-RateLimit-Reset`` epoch) rate limit headers."""
    lowered = {key.lower(): value for key, value in headers.items()}
    seconds = lowered.get("retry-after")
    if seconds is not None and seconds.isdigit():
        return datetime.now(timezone.utc) + timedelta(seconds=int(seconds))
    reset = lowered.get("x-ratelimit-reset")
    if reset is not None and reset.isdigit():
        return datetime.fromtimestamp(int(reset), tz=timezone.utc)
    return None
