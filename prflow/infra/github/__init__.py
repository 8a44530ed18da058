from prflow.infra.github.client import GitHubClient
from prflow.infra.github.source_control import GitHubSourceControl

__all__ = ["GitHubClient", "GitHubSourceControl"]
