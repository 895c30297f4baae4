"""Result primitive for multi-step workflows.

Each step of a workflow returns ``Ok(value)`` or ``Err(error)``; the
orchestrator stops at the first ``Err``.  ``unwrap`` is used once, at the
service boundary, to hand the error to the exception-based API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]


def unwrap(result: Result[T, E]) -> T:
    """Return the carried value or raise the carried error."""
    if isinstance(result, Err):
        raise result.error
    return result.value
