import argparse
import asyncio
import sys
from typing import Optional, Sequence

from prflow.config import Settings, load_settings
from prflow.core.exceptions import ConfigurationError
from prflow.core.pipeline import ReviewPipeline
from prflow.core.ports.logger import Logger
from prflow.core.schema.review import ReviewOutcome
from prflow.infra import (
    ConsoleLogger,
    GitHubClient,
    GitHubSourceControl,
    JiraClient,
    JiraTicketTracker,
    LogfireLogger,
    configure_logfire,
)

EXIT_CONFIG_ERROR = 2


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        settings = load_settings()
        logger = _build_logger(settings)
        outcome = asyncio.run(review(settings, logger, str(args.pr)))
    except ConfigurationError as error:
        print(f'prflow: configuration error: {error}', file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(outcome.text)
    return 0 if outcome.succeeded else 1


async def review(settings: Settings, logger: Logger, pr_ref: str) -> ReviewOutcome:
    _validate(settings)
    with GitHubClient(settings.github.token, timeout=settings.github.timeout) as github_client:
        async with JiraClient(
            base_url=settings.jira.base_url,
            email=settings.jira.email,
            api_token=settings.jira.api_token,
            timeout=settings.jira.timeout,
        ) as jira_client:
            pipeline = ReviewPipeline(
                source_control=GitHubSourceControl(
                    github_client,
                    settings.github.owner,
                    settings.github.repo,
                    logger,
                ),
                tracker=JiraTicketTracker(jira_client, logger),
                logger=logger,
            )
            return await pipeline.run(pr_ref)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='prflow',
        description='Review a GitHub pull request against its Jira ticket.',
    )
    parser.add_argument(
        'pr',
        help='Pull request number, #number, URL or head branch name',
    )
    return parser.parse_args(argv)


def _validate(settings: Settings) -> None:
    if not settings.github.owner or not settings.github.repo:
        raise ConfigurationError(
            'PRFLOW_REPO_OWNER and PRFLOW_REPO_NAME must be set'
        )
    if not settings.jira.base_url:
        raise ConfigurationError('JIRA_BASE_URL must be set')


def _build_logger(settings: Settings) -> Logger:
    if settings.logging.backend == 'console':
        return ConsoleLogger(settings.logging.name)
    if settings.logging.backend == 'logfire':
        if not settings.logging.logfire_token:
            raise ConfigurationError(
                'Logfire backend selected but PRFLOW_LOGFIRE_TOKEN is not set'
            )
        configure_logfire(settings.logging.logfire_token, settings.logging.name)
        return LogfireLogger(settings.logging.name)
    raise ConfigurationError(f'Unknown logging backend {settings.logging.backend}')


if __name__ == '__main__':
    raise SystemExit(main())
