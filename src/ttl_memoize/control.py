"""Process-wide kill switch and invalidation epoch."""

from __future__ import annotations

import logging
import threading

from .config import MemoizeConfig, load_config

logger = logging.getLogger("ttl-memoize")


class GlobalControl:
    def __init__(self, *, disabled: bool = False) -> None:
        self._lock = threading.Lock()
        self._disabled = bool(disabled)
        self._epoch = 0

    @classmethod
    def from_config(cls, config: MemoizeConfig) -> "GlobalControl":
        return cls(disabled=config.disabled)

    def disable(self) -> None:
        with self._lock:
            self._disabled = True
        logger.info("TTL memoization disabled")

    def enable(self) -> None:
        with self._lock:
            self._disabled = False
        logger.info("TTL memoization enabled")

    def reset_all(self) -> int:
        with self._lock:
            self._epoch += 1
            epoch = self._epoch
        logger.info("TTL memoization reset, epoch=%s", epoch)
        return epoch

    def is_bypassed(self) -> bool:
        return self._disabled

    def current_epoch(self) -> int:
        return self._epoch


_default_control: GlobalControl | None = None
_default_lock = threading.Lock()


def default_control() -> GlobalControl:
    """Return the process default control, creating it from config on first use."""
    global _default_control
    with _default_lock:
        if _default_control is None:
            _default_control = GlobalControl.from_config(load_config())
        return _default_control


def reset_default_control() -> None:
    """Drop the process default control; the next lookup rebuilds it."""
    global _default_control
    with _default_lock:
        _default_control = None


def disable() -> None:
    default_control().disable()


def enable() -> None:
    default_control().enable()


def reset_all() -> int:
    return default_control().reset_all()
