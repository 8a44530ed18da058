"""Typed results returned by each pipeline stage.

A stage either produced its value (``Ok``), produced a lower-fidelity value
the pipeline can still continue with (``SoftDegraded``), or hit a hard
failure (``Fatal``).
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class SoftDegraded(Generic[T]):
    value: T
    note: str


@dataclass(frozen=True, slots=True)
class Fatal:
    reason: str


StageResult = Union[Ok[T], SoftDegraded[T], Fatal]
