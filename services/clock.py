"""Injectable time and randomness sources for the interview services."""
from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """Clock that always returns ``moment``."""

    pinned = as_utc(moment)
    return lambda: pinned


def pick(rng: random.Random, candidates: Sequence[T]) -> Optional[T]:
    """Uniform choice among ``candidates``; ``None`` when empty."""

    if not candidates:
        return None
    return rng.choice(list(candidates))


__all__ = ["Clock", "utc_now", "as_utc", "fixed_clock", "pick"]
