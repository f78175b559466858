"""Configuration helpers for ttl_memoize."""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger("ttl-memoize")

DEFAULT_TTL = 1000


@dataclass(frozen=True)
class MemoizeConfig:
    disabled: bool = False
    default_ttl: int = DEFAULT_TTL


def _parse_default_ttl(value: str | None) -> int:
    if not value:
        return DEFAULT_TTL
    try:
        parsed = int(value.strip())
    except ValueError:
        logger.warning("Ignoring non-integer TTL_MEMOIZE_DEFAULT_TTL: %r", value)
        return DEFAULT_TTL
    if parsed <= 0:
        logger.warning("Ignoring non-positive TTL_MEMOIZE_DEFAULT_TTL: %r", value)
        return DEFAULT_TTL
    return parsed


def load_config() -> MemoizeConfig:
    return MemoizeConfig(
        disabled=os.getenv("TTL_MEMOIZE_DISABLED", "false").lower() in {"1", "true", "yes"},
        default_ttl=_parse_default_ttl(os.getenv("TTL_MEMOIZE_DEFAULT_TTL")),
    )
