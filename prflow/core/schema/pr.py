from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PRInfo:
    title: str
    body: str
    head_branch: str
    diff: str
