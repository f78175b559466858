"""Expiry rules: wall-clock duration or access-count budget.

A policy never owns state. It reads and writes ``cell.ttl_state``, which
holds either a monotonic "valid until" instant (duration) or the remaining
number of accesses (count).
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from typing import Any, Union

from .errors import InvalidTTLError

TTL = Union[int, dt.timedelta]


@dataclass(frozen=True)
class DurationPolicy:
    seconds: float

    def expired_state(self) -> float:
        return float("-inf")

    def decrement(self, cell: Any) -> None:
        return None

    def is_expired(self, cell: Any, now: float) -> bool:
        return now >= cell.ttl_state

    def extend(self, cell: Any, now: float) -> None:
        cell.ttl_state = now + self.seconds


@dataclass(frozen=True)
class CountPolicy:
    count: int

    def expired_state(self) -> int:
        # the next decrement lands on zero
        return 1

    def decrement(self, cell: Any) -> None:
        cell.ttl_state -= 1

    def is_expired(self, cell: Any, now: float) -> bool:
        return cell.ttl_state <= 0

    def extend(self, cell: Any, now: float) -> None:
        cell.ttl_state = self.count


TTLPolicy = Union[DurationPolicy, CountPolicy]


def policy_for(ttl: TTL) -> TTLPolicy:
    """Pick the policy variant from the type of ``ttl``."""
    if isinstance(ttl, dt.timedelta):
        seconds = ttl.total_seconds()
        if seconds <= 0:
            raise InvalidTTLError(ttl)
        return DurationPolicy(seconds)
    # bool is an int subclass but never a sensible budget
    if isinstance(ttl, int) and not isinstance(ttl, bool):
        if ttl <= 0:
            raise InvalidTTLError(ttl)
        return CountPolicy(ttl)
    raise InvalidTTLError(ttl)
