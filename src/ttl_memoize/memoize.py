"""Time-bounded, single-flight memoization of a nullary computation."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Generic, TypeVar

from .cell import CacheCell
from .config import load_config
from .control import GlobalControl, default_control
from .errors import InvalidArgumentsError
from .policy import TTL, TTLPolicy, policy_for

logger = logging.getLogger("ttl-memoize")

V = TypeVar("V")


class MemoizedFunction(Generic[V]):
    """Serve ``compute()`` from one cache cell until its TTL runs out.

    Every call holds the cell lock for the decrement, the staleness check
    and, when stale, the recomputation. Concurrent callers on a stale cell
    therefore wait for a single refresh and then all see its result.

    When ``compute()`` raises, the TTL extension and epoch stamp made for
    that attempt stay in place and the previous value (if any) keeps being
    served until the window runs out again. A cell that never held a value
    retries on the next call.
    """

    def __init__(
        self,
        compute: Callable[[], V],
        policy: TTLPolicy,
        *,
        control: GlobalControl,
        clock: Callable[[], float] | None = None,
        cell: CacheCell | None = None,
        name: str | None = None,
    ) -> None:
        self._compute = compute
        self.policy = policy
        self.control = control
        self.cell = cell if cell is not None else CacheCell(policy)
        self._clock = clock or time.monotonic
        self.name = name or getattr(compute, "__qualname__", None) or repr(compute)

    def __repr__(self) -> str:
        return f"<MemoizedFunction {self.name} policy={self.policy!r}>"

    def get(self, *args: Any, **kwargs: Any) -> V:
        if args or kwargs:
            raise InvalidArgumentsError(self.name)

        cell = self.cell
        cell.ensure_initialized()
        with cell.lock:
            self.policy.decrement(cell)
            now = self._clock()
            if self._is_stale(now):
                self.policy.extend(cell, now)
                cell.stamped_epoch = self.control.current_epoch()
                logger.debug("Refreshing memoized value for %s", self.name)
                try:
                    cell.value = self._compute()
                except Exception:
                    logger.debug("Refresh failed for %s", self.name, exc_info=True)
                    raise
            return cell.value

    __call__ = get

    def reset(self) -> None:
        """Expire the cached value; the next ``get()`` recomputes it."""
        self.cell.ensure_initialized()
        self.cell.force_expire()

    def _is_stale(self, now: float) -> bool:
        cell = self.cell
        if self.control.is_bypassed():
            return True
        if self.control.current_epoch() != cell.stamped_epoch:
            return True
        if not cell.has_value:
            return True
        return self.policy.is_expired(cell, now)

    # Lock-taking building blocks of get(), exposed as the companion helpers.

    def setup(self) -> None:
        self.cell.ensure_initialized()

    def decrement_ttl(self) -> None:
        self.cell.ensure_initialized()
        with self.cell.lock:
            self.policy.decrement(self.cell)

    def ttl_exceeded(self) -> bool:
        self.cell.ensure_initialized()
        with self.cell.lock:
            return self._is_stale(self._clock())

    def extend_ttl(self) -> Any:
        self.cell.ensure_initialized()
        with self.cell.lock:
            self.policy.extend(self.cell, self._clock())
            return self.cell.ttl_state


def memoize(
    func: Callable[[], V] | None = None,
    *,
    ttl: TTL | None = None,
    control: GlobalControl | None = None,
    clock: Callable[[], float] | None = None,
) -> Any:
    """Memoize a free nullary function with one process-wide cell.

    Usable as ``memoize(fn, ttl=...)`` or as ``@memoize(ttl=...)``.
    """

    def decorator(fn: Callable[[], V]) -> MemoizedFunction[V]:
        resolved_control = control or default_control()
        resolved_ttl = ttl if ttl is not None else load_config().default_ttl
        wrapped = MemoizedFunction(
            fn,
            policy_for(resolved_ttl),
            control=resolved_control,
            clock=clock,
        )
        functools.update_wrapper(wrapped, fn, updated=())
        return wrapped

    if func is not None:
        return decorator(func)
    return decorator
