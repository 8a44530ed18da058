from datetime import datetime, timedelta, timezone

import pytest
from github import GithubException

from prflow.core.analysis import analyze
from prflow.core.exceptions import (
    PRFetchError,
    SourceAuthenticationError,
    SourceError,
    SourceNotFoundError,
    SourceRateLimitError,
)
from prflow.infra.github.source_control import GitHubSourceControl
from tests.fakes import (
    FakeFile,
    FakeGitHubClient,
    FakeLogger,
    FakePullRequest,
    FakePullRequestPart,
    FakeRepository,
)


def _make_fake_pr(
    number: int = 1,
    title: str = "Test PR",
    body: str | None = "Test body",
    head: str = "feat/PAB-1-thing",
    files: list[FakeFile] | None = None,
) -> FakePullRequest:
    return FakePullRequest(
        number=number,
        title=title,
        body=body,
        head=FakePullRequestPart(ref=head),
        _files=files
        if files is not None
        else [
            FakeFile(
                filename="file1.py",
                patch="@@ -1 +1 @@\n-old\n+new",
            )
        ],
    )


def _make_source(client: FakeGitHubClient, logger: FakeLogger | None = None) -> GitHubSourceControl:
    return GitHubSourceControl(client, "owner", "repo", logger or FakeLogger())


class TestGitHubSourceControlAuthStatus:
    @pytest.mark.asyncio
    async def test_authenticated_when_login_succeeds(self) -> None:
        source = _make_source(FakeGitHubClient(FakeRepository([])))

        assert await source.auth_status() is True

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthenticated(self) -> None:
        logger = FakeLogger()
        source = _make_source(FakeGitHubClient(FakeRepository([]), has_token=False), logger)

        assert await source.auth_status() is False
        assert "GitHub token missing" in logger.messages("warning")

    @pytest.mark.asyncio
    async def test_login_error_is_unauthenticated(self) -> None:
        error = GithubException(401, {"message": "Bad credentials"}, None)
        client = FakeGitHubClient(FakeRepository([]), login_error=error)
        logger = FakeLogger()

        assert await _make_source(client, logger).auth_status() is False
        assert "GitHub auth check failed" in logger.messages("warning")


class TestGitHubSourceControlFetchPR:
    @pytest.mark.asyncio
    async def test_fetches_by_number(self) -> None:
        repo = FakeRepository([_make_fake_pr(number=1), _make_fake_pr(number=2, title="Other")])
        source = _make_source(FakeGitHubClient(repo))

        pr = await source.fetch_pr("2")

        assert pr.title == "Other"
        assert pr.body == "Test body"
        assert pr.head_branch == "feat/PAB-1-thing"

    @pytest.mark.asyncio
    async def test_fetches_by_head_branch(self) -> None:
        repo = FakeRepository([_make_fake_pr(number=7, head="feat/ABC-1")])
        source = _make_source(FakeGitHubClient(repo))

        pr = await source.fetch_pr("feat/ABC-1")

        assert pr.head_branch == "feat/ABC-1"
        assert repo.pull_queries == [{"state": "all", "head": "owner:feat/ABC-1"}]

    @pytest.mark.asyncio
    async def test_unknown_branch_raises_not_found(self) -> None:
        repo = FakeRepository([_make_fake_pr(head="feat/ABC-1")])
        source = _make_source(FakeGitHubClient(repo))

        with pytest.raises(SourceNotFoundError) as excinfo:
            await source.fetch_pr("feat/missing")

        assert excinfo.value.resource == "owner/repo#feat/missing"

    @pytest.mark.asyncio
    async def test_missing_body_becomes_empty_string(self) -> None:
        repo = FakeRepository([_make_fake_pr(body=None)])

        pr = await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        assert pr.body == ""

    @pytest.mark.asyncio
    async def test_builds_unified_diff_from_file_patches(self) -> None:
        files = [
            FakeFile(filename="src/app.js", patch="@@ -8,1 +10,2 @@\n ctx\n+// TODO fix"),
            FakeFile(filename="src/new.ts", patch="@@ -0,0 +1 @@\n+let x: any", status="added"),
            FakeFile(filename="logo.png", patch=None),
            FakeFile(
                filename="lib/renamed.js",
                patch="@@ -1 +1 @@\n-a\n+b",
                status="renamed",
                previous_filename="lib/old.js",
            ),
        ]
        repo = FakeRepository([_make_fake_pr(files=files)])

        pr = await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        assert pr.diff == (
            "diff --git a/src/app.js b/src/app.js\n"
            "--- a/src/app.js\n"
            "+++ b/src/app.js\n"
            "@@ -8,1 +10,2 @@\n ctx\n+// TODO fix\n"
            "diff --git a/src/new.ts b/src/new.ts\n"
            "--- /dev/null\n"
            "+++ b/src/new.ts\n"
            "@@ -0,0 +1 @@\n+let x: any\n"
            "diff --git a/logo.png b/logo.png\n"
            "Binary files a/logo.png and b/logo.png differ\n"
            "diff --git a/lib/old.js b/lib/renamed.js\n"
            "--- a/lib/old.js\n"
            "+++ b/lib/renamed.js\n"
            "@@ -1 +1 @@\n-a\n+b\n"
        )
        assert [(f.file, f.line) for f in analyze(pr.diff)] == [
            ("src/app.js", 10),
            ("src/new.ts", 1),
        ]

    @pytest.mark.asyncio
    async def test_file_listing_error_raises_fetch_error(self) -> None:
        pr = _make_fake_pr()
        pr._files_error = GithubException(500, {"message": "boom"}, None)
        source = _make_source(FakeGitHubClient(FakeRepository([pr])))

        with pytest.raises(PRFetchError) as excinfo:
            await source.fetch_pr("1")

        assert excinfo.value.identifier == "1"


class TestGitHubSourceControlErrorTranslation:
    @pytest.mark.asyncio
    async def test_unauthorized_raises_authentication_error(self) -> None:
        error = GithubException(401, {"message": "Bad credentials"}, None)
        client = FakeGitHubClient(FakeRepository([]), repo_error=error)

        with pytest.raises(SourceAuthenticationError):
            await _make_source(client).fetch_pr("1")

    @pytest.mark.asyncio
    async def test_missing_pull_raises_not_found(self) -> None:
        source = _make_source(FakeGitHubClient(FakeRepository([])))

        with pytest.raises(SourceNotFoundError) as excinfo:
            await source.fetch_pr("99")

        assert excinfo.value.resource == "owner/repo#99"

    @pytest.mark.asyncio
    async def test_rate_limit_carries_retry_after(self) -> None:
        error = GithubException(
            403,
            {"message": "rate limited"},
            {"X-RateLimit-Reset": "1705320000"},
        )
        repo = FakeRepository([], error=error)

        with pytest.raises(SourceRateLimitError) as excinfo:
            await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        assert excinfo.value.retry_after.timestamp() == 1705320000

    @pytest.mark.asyncio
    async def test_other_errors_raise_source_error(self) -> None:
        error = GithubException(502, {"message": "bad gateway"}, None)
        repo = FakeRepository([], error=error)

        with pytest.raises(SourceError) as excinfo:
            await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        assert type(excinfo.value) is SourceError

    @pytest.mark.asyncio
    async def test_secondary_rate_limit_uses_retry_after_seconds(self) -> None:
        error = GithubException(429, {"message": "slow down"}, {"retry-after": "60"})
        repo = FakeRepository([], error=error)
        before = datetime.now(timezone.utc)

        with pytest.raises(SourceRateLimitError) as excinfo:
            await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        waited = excinfo.value.retry_after - before
        assert timedelta(seconds=59) < waited < timedelta(seconds=70)

    @pytest.mark.asyncio
    async def test_forbidden_without_rate_limit_headers_is_source_error(self) -> None:
        error = GithubException(403, {"message": "Resource not accessible"}, None)
        repo = FakeRepository([], error=error)

        with pytest.raises(SourceError) as excinfo:
            await _make_source(FakeGitHubClient(repo)).fetch_pr("1")

        assert type(excinfo.value) is SourceError
        assert "HTTP 403" in str(excinfo.value)
