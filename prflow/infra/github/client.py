from typing import Optional

from github import Auth, Github


class GitHubClient:
    def __init__(self, token: Optional[str], timeout: float = 15.0) -> None:
        self._has_token = bool(token)
        auth = Auth.Token(token) if token else None
        self._client = Github(auth=auth, timeout=int(timeout))

    @property
    def has_token(self) -> bool:
        return self._has_token

    def get_repo(self, owner: str, name: str):
        return self._client.get_repo(f'{owner}/{name}')

    def get_login(self) -> str:
        return self._client.get_user().login

    def close(self) -> None:
        try:
            self._client.close()
        except AttributeError:
            return

    def __enter__(self) -> 'GitHubClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()
