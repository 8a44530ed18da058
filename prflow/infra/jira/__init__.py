from prflow.infra.jira.client import JiraClient
from prflow.infra.jira.tracker import JiraTicketTracker

__all__ = ["JiraClient", "JiraTicketTracker"]
