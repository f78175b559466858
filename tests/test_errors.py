from ttl_memoize.errors import (
    HINT_ARGUMENTS,
    HINT_CONFLICT,
    InvalidArgumentsError,
    InvalidTTLError,
    MethodNotFoundError,
    NameConflictError,
    TTLMemoizationError,
)


def test_method_not_found_carries_name_and_hint():
    exc = MethodNotFoundError("baz")
    assert isinstance(exc, TTLMemoizationError)
    assert str(exc) == "Method not defined: baz"
    assert exc.method_name == "baz"
    assert exc.hint


def test_name_conflict_reports_conflicting_name():
    exc = NameConflictError("bar", "reset_memoized_value_for_bar")
    assert str(exc) == "Method name conflict: reset_memoized_value_for_bar"
    assert exc.method_name == "bar"
    assert exc.conflicting_name == "reset_memoized_value_for_bar"
    assert exc.hint == HINT_CONFLICT


def test_invalid_arguments_is_a_type_error():
    exc = InvalidArgumentsError("Klass.boom")
    assert isinstance(exc, TypeError)
    assert isinstance(exc, TTLMemoizationError)
    assert exc.hint == HINT_ARGUMENTS


def test_invalid_ttl_is_a_value_error():
    exc = InvalidTTLError(0)
    assert isinstance(exc, ValueError)
    assert exc.ttl == 0
    assert "0" in str(exc)
