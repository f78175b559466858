"""Validate ttl_memoize environment variables without touching any cache."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from ttl_memoize.config import load_config


def main() -> int:
    load_dotenv()
    config = load_config()
    errors: list[str] = []
    warnings: list[str] = []

    raw_disabled = os.getenv("TTL_MEMOIZE_DISABLED")
    if raw_disabled and raw_disabled.strip().lower() not in {"1", "true", "yes", "0", "false", "no"}:
        errors.append("TTL_MEMOIZE_DISABLED should be one of 1/true/yes or 0/false/no")

    raw_ttl = os.getenv("TTL_MEMOIZE_DEFAULT_TTL")
    if raw_ttl and not (raw_ttl.strip().isdigit() and int(raw_ttl) > 0):
        errors.append("TTL_MEMOIZE_DEFAULT_TTL must be a positive integer call count")

    if config.disabled:
        warnings.append("Memoization is disabled; every call recomputes (TTL_MEMOIZE_DISABLED)")

    if errors:
        print("Errors:")
        for item in errors:
            print(f"- {item}")

    if warnings:
        print("Warnings:")
        for item in warnings:
            print(f"- {item}")

    if errors:
        return 1

    print(f"OK: environment looks valid (default_ttl={config.default_ttl}, disabled={config.disabled})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
