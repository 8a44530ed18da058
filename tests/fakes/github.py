from dataclasses import dataclass, field
from typing import List, Optional

from github import GithubException


@dataclass
class FakePullRequestPart:
    ref: str


@dataclass
class FakeFile:
    filename: str
    patch: Optional[str]
    status: str = "modified"
    previous_filename: Optional[str] = None


@dataclass
class FakePullRequest:
    number: int
    title: str
    body: Optional[str]
    head: Optional[FakePullRequestPart]
    _files: List[FakeFile] = field(default_factory=list)
    _files_error: Optional[GithubException] = None

    def get_files(self) -> List[FakeFile]:
        if self._files_error is not None:
            raise self._files_error
        return self._files


class FakeRepository:
    def __init__(
        self,
        pulls: List[FakePullRequest],
        error: Optional[GithubException] = None,
    ) -> None:
        self._pulls = pulls
        self._error = error
        self.pull_queries: List[dict] = []

    def get_pull(self, number: int) -> FakePullRequest:
        if self._error is not None:
            raise self._error
        for pr in self._pulls:
            if pr.number == number:
                return pr
        raise GithubException(404, {"message": "Not Found"}, None)

    def get_pulls(
        self,
        state: str = "open",
        head: Optional[str] = None,
    ) -> List[FakePullRequest]:
        if self._error is not None:
            raise self._error
        self.pull_queries.append({"state": state, "head": head})
        branch = head.split(":", 1)[1] if head else None
        return [
            pr
            for pr in self._pulls
            if branch is None or (pr.head is not None and pr.head.ref == branch)
        ]


class FakeGitHubClient:
    def __init__(
        self,
        repo: FakeRepository,
        *,
        has_token: bool = True,
        login_error: Optional[Exception] = None,
        repo_error: Optional[GithubException] = None,
    ) -> None:
        self._repo = repo
        self.has_token = has_token
        self._login_error = login_error
        self._repo_error = repo_error

    def get_repo(self, owner: str, name: str) -> FakeRepository:
        if self._repo_error is not None:
            raise self._repo_error
        return self._repo

    def get_login(self) -> str:
        if self._login_error is not None:
            raise self._login_error
        return "octocat"

    def close(self) -> None:
        pass
