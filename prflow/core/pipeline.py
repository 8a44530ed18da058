from typing import List, Optional, Sequence, Tuple, TypeVar, Union

from prflow.core.analysis import DEFAULT_RULES, Rule, analyze
from prflow.core.auth import AuthProbe
from prflow.core.identifiers import find_ticket_key, normalize_pr_ref
from prflow.core.ports.logger import Logger
from prflow.core.ports.source_control import SourceControl
from prflow.core.ports.ticket_tracker import TicketTracker
from prflow.core.report import render_report
from prflow.core.schema.pr import PRInfo
from prflow.core.schema.review import (
    AuthStatus,
    Finding,
    PipelineState,
    ReviewOutcome,
)
from prflow.core.schema.stage import Fatal, Ok, SoftDegraded, StageResult
from prflow.core.schema.ticket import TicketInfo

T = TypeVar("T")

BANNER = "---- PR Review ----"
UNKNOWN_STATUS = "Unknown"

_ALLOWED_TRANSITIONS = {
    PipelineState.START: (PipelineState.AUTH_CHECKED, PipelineState.FAILED),
    PipelineState.AUTH_CHECKED: (PipelineState.PR_FETCHED, PipelineState.FAILED),
    PipelineState.PR_FETCHED: (PipelineState.TICKET_RESOLVED, PipelineState.FAILED),
    PipelineState.TICKET_RESOLVED: (PipelineState.ANALYZED,),
    PipelineState.ANALYZED: (PipelineState.DONE,),
    PipelineState.DONE: (),
    PipelineState.FAILED: (),
}


class _ReviewRun:
    """Mutable state owned by a single ``ReviewPipeline.run`` call."""

    def __init__(self, pr_ref: str) -> None:
        self.pr_ref = pr_ref
        self.state = PipelineState.START
        self.transitions: List[PipelineState] = [PipelineState.START]
        self.progress: List[str] = [BANNER]
        self.ticket: Optional[TicketInfo] = None
        self.findings: Tuple[Finding, ...] = ()

    def advance(self, state: PipelineState) -> None:
        if state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal review transition {self.state.name} -> {state.name}"
            )
        self.state = state
        self.transitions.append(state)

    def note(self, line: str) -> None:
        self.progress.append(line)

    def outcome(self, text: str) -> ReviewOutcome:
        return ReviewOutcome(
            state=self.state,
            text=text,
            progress=tuple(self.progress),
            ticket=self.ticket,
            findings=self.findings,
            transitions=tuple(self.transitions),
        )


class ReviewPipeline:
    """Runs one review through auth, fetch, ticket, analysis and report.

    Source control is a hard dependency: losing it ends the run in
    ``FAILED``. The ticket tracker is a soft dependency: losing it yields a
    placeholder ticket and the run still reaches ``DONE``. Expected failures
    are reported through the returned ``ReviewOutcome``, never raised.
    """

    def __init__(
        self,
        source_control: SourceControl,
        tracker: TicketTracker,
        logger: Logger,
        *,
        rules: Sequence[Rule] = DEFAULT_RULES,
    ) -> None:
        self._source_control = source_control
        self._tracker = tracker
        self._logger = logger
        self._rules = tuple(rules)
        self._probe = AuthProbe(source_control, tracker, logger)

    async def run(self, pr_ref: str) -> ReviewOutcome:
        run = _ReviewRun(pr_ref)
        self._logger.info("Review starting", pr=pr_ref)

        run.note("**Step 1 of 4:** Verifying authentication status...")
        auth = await self._probe.probe()
        self._transition(run, PipelineState.AUTH_CHECKED)
        gate = self._check_auth(auth)
        if isinstance(gate, Fatal):
            return self._fail(run, gate)
        tracker_ok = isinstance(gate, Ok)
        run.note("Source control authenticated")
        self._accept(run, gate)
        if tracker_ok:
            run.note("Ticket tracker authenticated")

        run.note("**Step 2 of 4:** Fetching PR info...")
        fetched = await self._fetch_pr(pr_ref)
        if isinstance(fetched, Fatal):
            return self._fail(run, fetched)
        pr = self._accept(run, fetched)
        self._transition(run, PipelineState.PR_FETCHED)
        run.note(f"Found PR: {pr.title}")
        run.note(f"Branch: {pr.head_branch}")
        line_count = len(pr.diff.split("\n"))
        run.note(f"Found {line_count} lines of changes")

        run.note("**Step 3 of 4:** Extracting ticket...")
        resolved = await self._resolve_ticket(run, pr, tracker_ok)
        if isinstance(resolved, Fatal):
            return self._fail(run, resolved)
        run.ticket = self._accept(run, resolved)
        self._transition(run, PipelineState.TICKET_RESOLVED)

        run.note("**Step 4 of 4:** Analyzing code changes...")
        run.findings = analyze(pr.diff, self._rules)
        self._transition(run, PipelineState.ANALYZED)
        run.note(f"Found {len(run.findings)} review comments")

        report = render_report(pr_ref, run.ticket, run.findings)
        self._transition(run, PipelineState.DONE)
        self._logger.info(
            "Review complete",
            pr=pr_ref,
            ticket=run.ticket.key if run.ticket else None,
            finding_count=len(run.findings),
        )
        return run.outcome(report)

    def _check_auth(self, auth: AuthStatus) -> StageResult[AuthStatus]:
        if not auth.source_control_ok:
            return Fatal(_first_diagnostic(auth, "Source control not authenticated."))
        if not auth.tracker_ok:
            return SoftDegraded(
                auth,
                "Ticket tracker not authenticated, ticket features limited",
            )
        return Ok(auth)

    async def _fetch_pr(self, pr_ref: str) -> StageResult[PRInfo]:
        identifier = normalize_pr_ref(pr_ref)
        try:
            pr = await self._source_control.fetch_pr(identifier)
        except Exception as error:  # noqa: BLE001
            self._logger.exception(
                "Pull request fetch failed",
                identifier=identifier,
                error=str(error),
            )
            return Fatal(f"could not fetch pull request {identifier}: {error}")
        return Ok(pr)

    async def _resolve_ticket(
        self,
        run: _ReviewRun,
        pr: PRInfo,
        tracker_ok: bool,
    ) -> StageResult[Optional[TicketInfo]]:
        key = find_ticket_key(pr.head_branch, pr.title, pr.body)
        if key is None:
            run.note("No ticket found in PR")
            return Ok(None)

        run.note(f"Found ticket: {key}")
        url = self._tracker.browse_url(key)
        if not tracker_ok:
            return SoftDegraded(
                TicketInfo(
                    key=key,
                    summary=f"{key} (auth required for details)",
                    description="Ticket tracker authentication required for full details",
                    status=UNKNOWN_STATUS,
                    url=url,
                ),
                "Skipping ticket details (ticket tracker not authenticated)",
            )

        run.note("Fetching ticket details...")
        try:
            ticket = await self._tracker.fetch_ticket(key)
        except Exception as error:  # noqa: BLE001
            self._logger.exception(
                "Ticket fetch failed",
                key=key,
                error=str(error),
            )
            return SoftDegraded(
                TicketInfo(
                    key=key,
                    summary=f"Ticket {key} (tracker access failed)",
                    description=f"View ticket at: {url}",
                    status=UNKNOWN_STATUS,
                    url=url,
                ),
                f"Ticket details unavailable: {error}",
            )
        run.note(f"Ticket loaded: {ticket.summary}")
        return Ok(ticket)

    def _accept(self, run: _ReviewRun, result: Union[Ok[T], SoftDegraded[T]]) -> T:
        if isinstance(result, Ok):
            return result.value
        if isinstance(result, SoftDegraded):
            run.note(result.note)
            self._logger.warning(
                "Review degraded",
                pr=run.pr_ref,
                state=run.state.value,
                note=result.note,
            )
            return result.value
        raise TypeError(f"Unexpected stage result {result!r}")

    def _fail(self, run: _ReviewRun, fatal: Fatal) -> ReviewOutcome:
        failed_at = run.state
        self._transition(run, PipelineState.FAILED)
        run.note(f"Code review failed: {fatal.reason}")
        self._logger.error(
            "Review failed",
            pr=run.pr_ref,
            failed_at=failed_at.value,
            reason=fatal.reason,
        )
        return run.outcome("\n".join(run.progress) + "\n")

    def _transition(self, run: _ReviewRun, state: PipelineState) -> None:
        run.advance(state)
        self._logger.debug("Review transition", pr=run.pr_ref, state=state.value)


def _first_diagnostic(auth: AuthStatus, default: str) -> str:
    return auth.diagnostics[0] if auth.diagnostics else default
