import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class GitHubSettings:
    token: Optional[str]
    owner: Optional[str]
    repo: Optional[str]
    timeout: float


@dataclass(frozen=True, slots=True)
class JiraSettings:
    base_url: Optional[str]
    email: Optional[str]
    api_token: Optional[str]
    timeout: float


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    backend: str
    name: str
    logfire_token: Optional[str]


@dataclass(frozen=True, slots=True)
class Settings:
    github: GitHubSettings
    jira: JiraSettings
    logging: LoggingSettings


def load_settings() -> Settings:
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        github=GitHubSettings(
            token=_env_or_default("GITHUB_TOKEN"),
            owner=_env_or_default("PRFLOW_REPO_OWNER"),
            repo=_env_or_default("PRFLOW_REPO_NAME"),
            timeout=_env_float("PRFLOW_GITHUB_TIMEOUT", 15.0),
        ),
        jira=JiraSettings(
            base_url=_env_or_default("JIRA_BASE_URL"),
            email=_env_or_default("JIRA_EMAIL"),
            api_token=_env_or_default("JIRA_API_TOKEN"),
            timeout=_env_float("PRFLOW_JIRA_TIMEOUT", 10.0),
        ),
        logging=LoggingSettings(
            backend=_env_or_default("PRFLOW_LOGGER_BACKEND", "console").lower(),
            name=_env_or_default("PRFLOW_LOGGER_NAME", "prflow"),
            logfire_token=_env_or_default("PRFLOW_LOGFIRE_TOKEN"),
        ),
    )


def _env_or_default(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if not value:
        return default
    return value


def _env_float(name: str, default: float) -> float:
    return float(_env_or_default(name) or default)
