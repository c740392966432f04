"""The `Ok` / `Nil` / `Err` containers.

Every variant answers the same set of methods, so a computation can be
chained without checking which state it is in:

    >>> Ok(5).map(lambda x: x * 2).filter(lambda x: x > 5)
    Ok(10)
    >>> Err.of("bad").catch(lambda e: Ok(f"recovered: {e}"))
    Ok('recovered: bad')

`Ok` takes ownership of mutable payloads: the value is deep-copied on
construction and `get()` hands it out exactly once. Reading it again
raises `ConsumedReference`. Scalars, immutable built-ins and callables can
be read any number of times.
"""

from __future__ import annotations
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
import inspect
from typing import Any, Generic, NoReturn, TypeGuard, TypeVar, Union

from .config import settings
from .errors import ConsumedReference, WrappedError
from .logging import logger
from .util import is_defined, is_error, is_function, is_instance_of, is_mutable, try_clone


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


log = logger()


class _Unset:
    def __repr__(self):
        return "<consumed>"


UNSET: Any = _Unset()


Cases = Mapping[str, Callable[..., Any]]


def _handler(cases: Cases | None, handlers: dict[str, Callable[..., Any]], key: str):
    h = handlers.get(key, (cases or {}).get(key))
    return h if is_function(h) else None


class Ok(Generic[T]):
    """A present value."""
    __match_args__ = ("value",)
    __slots__ = ("_value", "_mut")

    def __init__(self, value: T):
        self._value = try_clone(value, settings().warn_on_copy)
        self._mut = is_mutable(value)

    @staticmethod
    def of(value: U) -> Ok[U]:
        return Ok(value)

    @property
    def gone(self) -> bool:
        return self._value is UNSET

    @property
    def value(self) -> T:
        """Same as `get()`, so `case Ok(v):` extracts the payload."""
        return self.get()

    def __bool__(self):
        return True

    def __eq__(self, other):
        if not isinstance(other, Ok):
            return NotImplemented
        if self.gone or other.gone:
            return self is other
        return self._value is other._value or self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"Ok({self._value!r})"

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        if self.gone:
            raise ConsumedReference()
        return Ok(fn(self._value))

    def chain(self, fn: Callable[[T], Any]) -> Result[Any]:
        if self.gone:
            return Err(ConsumedReference())
        return result(fn, self._value)

    async def await_(self, fn: Callable[[T], Awaitable[Any]]) -> Result[Any]:
        if self.gone:
            return Err(ConsumedReference())
        return await task(fn, self._value)

    def filter(self, pred: Callable[[T], bool]) -> Maybe[T]:
        return self if not self.gone and pred(self._value) else Nil()

    def guard(self, pred: Callable[[Any], TypeGuard[U]]) -> Maybe[U]:
        return self.filter(pred)  # type: ignore[return-value]

    def or_(self, _: Any = None) -> Ok[T]:
        return self

    def catch(self, _: Any = None) -> Ok[T]:
        return self

    def match(self, cases: Cases | None = None, /, **handlers: Callable[..., Any]) -> Any:
        if self.gone:
            gone = _handler(cases, handlers, "Gone")
            return gone() if gone else Err(ConsumedReference())
        ok = _handler(cases, handlers, "Ok")
        return ok(self._value) if ok else self

    def get(self) -> T:
        if self.gone:
            raise ConsumedReference()
        value = self._value
        if self._mut:
            self._value = UNSET
        return value


class Nil:
    """Absence of a value. There is exactly one instance."""
    __match_args__ = ()
    __slots__ = ()

    def __new__(cls):
        return NIL

    @staticmethod
    def of() -> Nil:
        return NIL

    def __bool__(self):
        return False

    def __repr__(self):
        return "Nil"

    def __reduce__(self):
        return (Nil, ())

    def map(self, _: Any = None) -> Nil:
        return self

    def chain(self, _: Any = None) -> Nil:
        return self

    async def await_(self, _: Any = None) -> Nil:
        return self

    def filter(self, _: Any = None) -> Nil:
        return self

    def guard(self, _: Any = None) -> Nil:
        return self

    def or_(self, fn: Callable[[], U | None]) -> Maybe[U]:
        return maybe(fn())

    def catch(self, _: Any = None) -> Nil:
        return self

    def match(self, cases: Cases | None = None, /, **handlers: Callable[..., Any]) -> Any:
        nil = _handler(cases, handlers, "Nil")
        return nil() if nil else self

    def get(self) -> None:
        return None


NIL: Nil = object.__new__(Nil)


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failure. The payload is always an `Exception`; anything else is
    wrapped in a `WrappedError`."""
    error: E

    def __post_init__(self):
        if not is_error(self.error):
            object.__setattr__(self, "error", WrappedError(self.error))

    @staticmethod
    def of(error: Any) -> Err[Exception]:
        return Err(error)

    def __bool__(self):
        return False

    def map(self, _: Any = None) -> Err[E]:
        return self

    def chain(self, _: Any = None) -> Err[E]:
        return self

    async def await_(self, _: Any = None) -> Err[E]:
        return self

    def filter(self, _: Any = None) -> Nil:
        return NIL

    def guard(self, _: Any = None) -> Nil:
        return NIL

    def or_(self, fn: Callable[[E], U | None]) -> Maybe[U]:
        return maybe(fn(self.error))

    def catch(self, fn: Callable[[E], Any]) -> Any:
        log.debug("recovering from `%r`", self.error)
        return fn(self.error)

    def match(self, cases: Cases | None = None, /, **handlers: Callable[..., Any]) -> Any:
        err = _handler(cases, handlers, "Err")
        return err(self.error) if err else self

    def get(self) -> NoReturn:
        raise self.error


Maybe = Union[Ok[T], Nil]
Result = Union[Ok[T], Nil, Err[Exception]]


is_ok = is_instance_of(Ok)


def is_nil(value: Any) -> TypeGuard[Nil]:
    return value is NIL


is_err = is_instance_of(Err)


def is_gone(value: Any) -> bool:
    return is_ok(value) and value.gone


def is_maybe(value: Any) -> TypeGuard[Maybe[Any]]:
    return is_ok(value) or is_nil(value)


def is_result(value: Any) -> TypeGuard[Result[Any]]:
    return is_ok(value) or is_nil(value) or is_err(value)


def maybe(value: T | Maybe[T] | None) -> Maybe[T]:
    if not is_defined(value):
        return NIL
    if is_maybe(value):
        return value
    return Ok(value)


def to_result(value: Any) -> Result[Any]:
    if not is_defined(value):
        return NIL
    if is_result(value):
        return value
    if is_error(value):
        return Err(value)
    return Ok(value)


def result(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Result[Any]:
    """Call `fn`, turning its return value or its exception into a `Result`."""
    try:
        value = fn(*args, **kwargs)
    except Exception as e:
        return Err.of(e)
    return to_result(value)


async def task(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Result[Any]:
    """Asynchronous counterpart of `result`: awaits what `fn` returns, if it
    is awaitable, and turns the outcome into a `Result`. Cancellation is not
    caught."""
    try:
        value = fn(*args, **kwargs)
        if inspect.isawaitable(value):
            value = await value
    except Exception as e:
        return Err.of(e)
    return to_result(value)


def unwrap(value: Any) -> Any:
    """Get the plain value out of a container: the error of an `Err`, the
    payload of an `Ok`, `None` for `Nil`. Other values pass through."""
    if is_err(value):
        return value.error
    if is_ok(value) or is_nil(value):
        return value.get()
    return value
