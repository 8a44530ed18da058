from prflow.infra.github import GitHubClient, GitHubSourceControl
from prflow.infra.jira import JiraClient, JiraTicketTracker
from prflow.infra.logging import ConsoleLogger, LogfireLogger, configure_logfire

__all__ = [
    'GitHubClient',
    'GitHubSourceControl',
    'JiraClient',
    'JiraTicketTracker',
    'ConsoleLogger',
    'LogfireLogger',
    'configure_logfire',
]
