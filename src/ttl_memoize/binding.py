"""Install TTL memoization in front of a method of a class.

Two entry points do the same thing:

- ``bind(Klass, "name", ttl=...)`` wraps an already defined method;
- ``@ttl_memoized(ttl=...)`` wraps a method from inside the class body.

Both install companion methods next to the wrapped one
(``reset_memoized_value_for_<name>`` and the ``_*_for_<name>`` helpers)
and refuse to overwrite anything already defined under those names.
"""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable
import weakref

from .cell import SETUP_LOCK, CacheCell
from .config import load_config
from .control import GlobalControl, default_control
from .errors import MethodNotFoundError, NameConflictError
from .memoize import MemoizedFunction
from .policy import TTL, policy_for

logger = logging.getLogger("ttl-memoize")

SCOPE_INSTANCE = "instance"
SCOPE_CLASS = "class"
SCOPE_STATIC = "static"

COMPANION_TEMPLATES = (
    "reset_memoized_value_for_{}",
    "_setup_memoization_for_{}",
    "_decrement_ttl_for_{}",
    "_ttl_exceeded_for_{}",
    "_extend_ttl_for_{}",
)


def companion_names(name: str) -> list[str]:
    return [template.format(name) for template in COMPANION_TEMPLATES]


def _check_companions(owner: type, name: str) -> None:
    for companion in companion_names(name):
        if hasattr(owner, companion):
            raise NameConflictError(name, companion)


class TTLMemoizedMethod:
    """Descriptor holding one ``MemoizedFunction`` per receiver.

    The receiver is the instance for plain methods, the class the method is
    looked up on for classmethods, and the owning class for staticmethods.
    """

    def __init__(
        self,
        func: Any,
        *,
        ttl: TTL | None = None,
        control: GlobalControl | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if isinstance(func, classmethod):
            self.scope = SCOPE_CLASS
            target = func.__func__
        elif isinstance(func, staticmethod):
            self.scope = SCOPE_STATIC
            target = func.__func__
        else:
            self.scope = SCOPE_INSTANCE
            target = func
        if not callable(target):
            raise TypeError(f"ttl_memoized expects a callable, got {target!r}")

        self.func = target
        self.policy = policy_for(ttl if ttl is not None else load_config().default_ttl)
        self.control = control or default_control()
        self._clock = clock
        self.owner: type | None = None
        self.name: str = getattr(target, "__name__", repr(target))
        # receiver id -> (anchor, cell)
        self._cells: dict[int, tuple[Any, CacheCell]] = {}
        functools.update_wrapper(self, target, updated=())

    def __repr__(self) -> str:
        return f"<TTLMemoizedMethod {self.name} scope={self.scope} policy={self.policy!r}>"

    def __set_name__(self, owner: type, name: str) -> None:
        _check_companions(owner, name)
        self.owner = owner
        self.name = name
        _install_companions(owner, name, self)
        logger.debug("Memoized %s.%s with %r", owner.__qualname__, name, self.policy)

    def __call__(self, receiver: Any, *args: Any, **kwargs: Any) -> Any:
        return self.for_receiver(receiver).get(*args, **kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if self.scope == SCOPE_INSTANCE:
            if instance is None:
                return self
            return self.for_receiver(instance)
        if self.scope == SCOPE_CLASS:
            return self.for_receiver(owner if owner is not None else type(instance))
        return self.for_receiver(self.owner if self.owner is not None else owner)

    def cell_for(self, receiver: Any) -> CacheCell:
        key = id(receiver)
        entry = self._cells.get(key)
        if entry is not None:
            return entry[1]
        with SETUP_LOCK:
            entry = self._cells.get(key)
            if entry is None:
                try:
                    weakref.finalize(receiver, self._cells.pop, key, None)
                    anchor = None
                except TypeError:
                    # not weak-referenceable: pinned so its id is never reused
                    anchor = receiver
                entry = (anchor, CacheCell(self.policy))
                self._cells[key] = entry
        return entry[1]

    def for_receiver(self, receiver: Any) -> MemoizedFunction[Any]:
        if self.scope == SCOPE_STATIC:
            compute = self.func
        else:
            compute = functools.partial(self.func, receiver)
        return MemoizedFunction(
            compute,
            self.policy,
            control=self.control,
            clock=self._clock,
            cell=self.cell_for(receiver),
            name=self._qualified_name(receiver),
        )

    def _qualified_name(self, receiver: Any) -> str:
        owner = receiver if isinstance(receiver, type) else type(receiver)
        return f"{owner.__qualname__}.{self.name}"


def _install_companions(owner: type, name: str, descriptor: TTLMemoizedMethod) -> None:
    reset_name, setup_name, decrement_name, exceeded_name, extend_name = companion_names(name)
    operations = {
        reset_name: lambda memoized: memoized.reset(),
        setup_name: lambda memoized: memoized.setup(),
        decrement_name: lambda memoized: memoized.decrement_ttl(),
        exceeded_name: lambda memoized: memoized.ttl_exceeded(),
        extend_name: lambda memoized: memoized.extend_ttl(),
    }
    for companion, operation in operations.items():
        setattr(owner, companion, _companion(descriptor, companion, operation))


def _companion(
    descriptor: TTLMemoizedMethod,
    companion: str,
    operation: Callable[[MemoizedFunction[Any]], Any],
) -> Any:
    if descriptor.scope == SCOPE_STATIC:

        def static_method() -> Any:
            return operation(descriptor.for_receiver(descriptor.owner))

        method: Any = static_method
    else:

        def bound_method(receiver: Any) -> Any:
            return operation(descriptor.for_receiver(receiver))

        method = bound_method

    method.__name__ = companion
    method.__qualname__ = f"{descriptor.owner.__qualname__}.{companion}"
    if descriptor.scope == SCOPE_CLASS:
        return classmethod(method)
    if descriptor.scope == SCOPE_STATIC:
        return staticmethod(method)
    return method


def bind(
    owner: type,
    name: str,
    *,
    ttl: TTL | None = None,
    control: GlobalControl | None = None,
    clock: Callable[[], float] | None = None,
) -> TTLMemoizedMethod:
    """Replace ``owner.name`` with a TTL-memoized version of itself."""
    try:
        raw = inspect.getattr_static(owner, name)
    except AttributeError:
        raise MethodNotFoundError(name) from None
    if isinstance(raw, TTLMemoizedMethod):
        raise NameConflictError(name, name)
    target = raw.__func__ if isinstance(raw, (classmethod, staticmethod)) else raw
    if not callable(target):
        raise MethodNotFoundError(name)
    _check_companions(owner, name)

    descriptor = TTLMemoizedMethod(raw, ttl=ttl, control=control, clock=clock)
    setattr(owner, name, descriptor)
    descriptor.__set_name__(owner, name)
    return descriptor


def ttl_memoized(
    func: Any = None,
    *,
    ttl: TTL | None = None,
    control: GlobalControl | None = None,
    clock: Callable[[], float] | None = None,
) -> Any:
    """Class-body decorator form of ``bind``.

    Usage::

        class Catalog:
            @ttl_memoized(ttl=dt.timedelta(minutes=5))
            def products(self):
                return load_products()

            @ttl_memoized(ttl=10)
            @classmethod
            def categories(cls):
                return load_categories()
    """

    def decorator(fn: Any) -> TTLMemoizedMethod:
        return TTLMemoizedMethod(fn, ttl=ttl, control=control, clock=clock)

    if func is not None:
        return decorator(func)
    return decorator
