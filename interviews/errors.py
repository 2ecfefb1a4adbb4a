"""Typed failures raised by the interview core."""
from __future__ import annotations


class InterviewError(Exception):
    """Base class for precondition failures surfaced to callers."""


class NotFoundError(InterviewError):
    """Session, job profile or question could not be located."""


class ForbiddenError(InterviewError):
    """Caller does not own the session or job profile."""


class InvalidStateError(InterviewError):
    """Operation is not legal for the session's current state."""


class InterviewValidationError(InterviewError):
    """A value was constructed outside its permitted range."""


__all__ = [
    "InterviewError",
    "NotFoundError",
    "ForbiddenError",
    "InvalidStateError",
    "InterviewValidationError",
]
