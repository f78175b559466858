"""Thread-safe, time-bounded memoization of zero-argument methods."""

import logging

from .binding import TTLMemoizedMethod, bind, companion_names, ttl_memoized
from .cell import CacheCell
from .config import MemoizeConfig, load_config
from .control import GlobalControl, default_control, disable, enable, reset_all, reset_default_control
from .errors import (
    InvalidArgumentsError,
    InvalidTTLError,
    MethodNotFoundError,
    NameConflictError,
    TTLMemoizationError,
)
from .memoize import MemoizedFunction, memoize
from .policy import CountPolicy, DurationPolicy, policy_for

__version__ = "0.1.0"

logger = logging.getLogger("ttl-memoize")
logger.addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "CacheCell",
    "CountPolicy",
    "DurationPolicy",
    "GlobalControl",
    "InvalidArgumentsError",
    "InvalidTTLError",
    "MemoizeConfig",
    "MemoizedFunction",
    "MethodNotFoundError",
    "NameConflictError",
    "TTLMemoizationError",
    "TTLMemoizedMethod",
    "bind",
    "companion_names",
    "default_control",
    "disable",
    "enable",
    "load_config",
    "memoize",
    "policy_for",
    "reset_all",
    "reset_default_control",
    "ttl_memoized",
]
