from __future__ import annotations
from collections.abc import Callable
import inspect
from typing import Any

from .errors import FlowTypeError
from .logging import logger
from .result import Err, Result, is_err, task, to_result
from .util import is_function


log = logger()


async def _step(call: Callable[[], Any]) -> Result[Any]:
    try:
        out = call()
    except Exception as e:
        return Err.of(e)
    if inspect.isawaitable(out):
        return await task(lambda: out)
    return to_result(out)


async def flow(initial: Any, *steps: Any) -> Result[Any]:
    """Run `steps` left to right, each receiving the payload of the previous
    outcome, and return the last outcome.

    When `initial` is callable there is no seed value: the pipeline starts
    from `Nil` and `initial` is the first step, called without arguments.
    Steps may be plain functions or coroutine functions; anything a step
    returns (or raises) is turned into a `Result`. The first `Err` stops the
    pipeline.

        >>> await flow(5, lambda x: x * 2, lambda x: x + 10, lambda x: x / 2)
        Ok(10.0)
    """
    if is_function(initial):
        current = await _step(initial)
        log.debug("flow seed `%s` -> %r", getattr(initial, "__name__", initial), current)
    else:
        current = to_result(initial)

    for i, fn in enumerate(steps):
        if is_err(current):
            log.debug("flow stopped before step %d: %s", i, current.error)
            break
        if not is_function(fn):
            return Err(FlowTypeError())
        current = await _step(lambda: fn(current.get()))
        log.debug("flow step %d `%s` -> %r", i, getattr(fn, "__name__", fn), current)

    return current
