from tests.fakes.github import (
    FakeFile,
    FakeGitHubClient,
    FakePullRequest,
    FakePullRequestPart,
    FakeRepository,
)
from tests.fakes.logger import FakeLogger
from tests.fakes.source_control import FakeSourceControl
from tests.fakes.ticket_tracker import BROWSE_BASE, FakeTicketTracker

__all__ = [
    "BROWSE_BASE",
    "FakeFile",
    "FakeGitHubClient",
    "FakeLogger",
    "FakePullRequest",
    "FakePullRequestPart",
    "FakeRepository",
    "FakeSourceControl",
    "FakeTicketTracker",
]
