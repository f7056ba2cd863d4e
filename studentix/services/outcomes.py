"""Explicit results for business-rule failures.

Services return an ``Outcome`` instead of raising for expected failures
(missing rows, duplicate attempts, ...). Routes turn failures into HTTP
errors with ``unwrap``.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import HTTPException, status

T = TypeVar("T")


class Failure(str, enum.Enum):
    """Expected failure of a service operation. The value is the user-facing message."""

    COURSE_NOT_FOUND = "Course not found"
    SECTION_NOT_FOUND = "Section not found"
    TEST_NOT_FOUND = "Test not found"
    TASK_NOT_FOUND = "Task not found"
    MATERIAL_NOT_FOUND = "Material not found"
    USER_NOT_FOUND = "User not found"
    DUPLICATE_ATTEMPT = "You have already submitted this test."
    ALREADY_ENROLLED = "You are already enrolled in this course"
    EMAIL_TAKEN = "Email already exists"

    @property
    def status_code(self) -> int:
        if self in _CONFLICTS:
            return status.HTTP_409_CONFLICT
        return status.HTTP_404_NOT_FOUND


_CONFLICTS = {Failure.DUPLICATE_ATTEMPT, Failure.ALREADY_ENROLLED, Failure.EMAIL_TAKEN}


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a failure, never both."""

    value: T | None = None
    failure: Failure | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> Outcome[T]:
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None


def unwrap(outcome: Outcome[T]) -> T:
    """Return the value or raise the matching HTTPException."""
    if outcome.failure is not None:
        raise HTTPException(
            status_code=outcome.failure.status_code,
            detail=outcome.failure.value,
        )
    return outcome.value  # type: ignore[return-value]
