"""Single-value cache cell guarded by its own lock."""

from __future__ import annotations

import threading
from typing import Any

from .policy import TTLPolicy

# Shared by every cell; only guards creation of the per-cell lock.
SETUP_LOCK = threading.Lock()

MISSING: Any = object()


class CacheCell:
    def __init__(self, policy: TTLPolicy, *, setup_lock: threading.Lock | None = None) -> None:
        self._policy = policy
        self._setup_lock = setup_lock or SETUP_LOCK
        self.value: Any = MISSING
        self.ttl_state: Any = None
        self.stamped_epoch: int | None = None
        self.lock: threading.Lock | None = None
        self.initialized = False

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING

    def ensure_initialized(self) -> None:
        if self.initialized:
            return
        with self._setup_lock:
            if self.initialized:
                return
            self.ttl_state = self._policy.expired_state()
            self.lock = threading.Lock()
            # published last so a lock-free reader never sees a half-built cell
            self.initialized = True

    def force_expire(self) -> None:
        self.ensure_initialized()
        with self.lock:
            self.ttl_state = self._policy.expired_state()
