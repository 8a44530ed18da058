from prflow.config.settings import (
    GitHubSettings,
    JiraSettings,
    LoggingSettings,
    Settings,
)


def get_test_settings() -> Settings:
    return Settings(
        github=GitHubSettings(
            token="test-token",
            owner="test-owner",
            repo="test-repo",
            timeout=5.0,
        ),
        jira=JiraSettings(
            base_url="https://tracker.example.com",
            email="dev@example.com",
            api_token="test-api-token",
            timeout=5.0,
        ),
        logging=LoggingSettings(
            backend="console",
            name="prflow-test",
            logfire_token=None,
        ),
    )
