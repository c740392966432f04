from __future__ import annotations
from collections.abc import Callable
from copy import deepcopy
from enum import Enum
import logging
from typing import Any, TypeGuard, TypeVar

from .logging import logger


T = TypeVar("T")


log = logger()


IMMUTABLE_TYPES: tuple[type, ...] = (
    type(None), bool, int, float, complex, str, bytes,
    tuple, frozenset, range, Enum,
)


def is_function(value: Any) -> TypeGuard[Callable[..., Any]]:
    return callable(value)


def is_defined(value: T | None) -> TypeGuard[T]:
    return value is not None


def is_error(value: Any) -> TypeGuard[Exception]:
    return isinstance(value, Exception)


def is_instance_of(dtype: type[T]) -> Callable[[Any], TypeGuard[T]]:
    def pred(value: Any) -> TypeGuard[T]:
        return isinstance(value, dtype)
    return pred


def is_mutable(value: Any) -> bool:
    """Structured values that an `Ok` should own exclusively. Scalars,
    immutable built-ins and callables can be shared freely."""
    return not isinstance(value, IMMUTABLE_TYPES) and not callable(value)


def try_clone(value: T, warn: bool = True) -> T:
    """Deep copy a mutable value. When the value refuses to be copied the
    original reference is returned."""
    if not is_mutable(value):
        return value
    try:
        return deepcopy(value)
    except Exception as e:
        if warn:
            log.warning("Failed to clone value of type `%s`: %s", type(value).__name__, e)
        return value


def tap(msg: str, level: int = logging.DEBUG) -> Callable[..., Any]:
    """Return a function that logs `msg` with its arguments and passes the
    first argument through, for use inside `map` or `flow`:

        Ok(data).map(tap("fetched:")).map(parse)
    """
    def _tap(*args: Any) -> Any:
        log.log(level, "%s %s", msg, " ".join(repr(a) for a in args))
        return args[0] if args else None
    return _tap
