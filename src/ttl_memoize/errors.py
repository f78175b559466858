"""Error types raised by ttl_memoize."""

from __future__ import annotations

HINT_METHOD = "Define the method before binding it."
HINT_CONFLICT = "Rename the conflicting attribute or bind a different method."
HINT_ARGUMENTS = "Only methods without arguments can be memoized."
HINT_TTL = "Pass a positive int (call count) or a positive datetime.timedelta."


class TTLMemoizationError(RuntimeError):
    def __init__(self, message: str, *, method_name: str | None = None, hint: str | None = None) -> None:
        super().__init__(message)
        self.method_name = method_name
        self.hint = hint


class MethodNotFoundError(TTLMemoizationError):
    def __init__(self, method_name: str) -> None:
        super().__init__(f"Method not defined: {method_name}", method_name=method_name, hint=HINT_METHOD)


class NameConflictError(TTLMemoizationError):
    def __init__(self, method_name: str, conflicting_name: str) -> None:
        super().__init__(
            f"Method name conflict: {conflicting_name}",
            method_name=method_name,
            hint=HINT_CONFLICT,
        )
        self.conflicting_name = conflicting_name


class InvalidArgumentsError(TTLMemoizationError, TypeError):
    def __init__(self, method_name: str | None) -> None:
        super().__init__(
            "Cannot cache method which requires arguments",
            method_name=method_name,
            hint=HINT_ARGUMENTS,
        )


class InvalidTTLError(TTLMemoizationError, ValueError):
    def __init__(self, ttl: object) -> None:
        super().__init__(f"Unsupported ttl: {ttl!r}", hint=HINT_TTL)
        self.ttl = ttl
