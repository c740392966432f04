from __future__ import annotations
import asyncio
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass
import inspect
import time
from typing import Any, Optional

from .config import settings
from .logging import logger
from .result import Err, Result, to_result


log = logger()


@dataclass
class Elapsed:
    elapsed: float | None = None

    def __str__(self):
        return "?" if self.elapsed is None else f"{self.elapsed:.3f}s"


@contextmanager
def timer():
    e = Elapsed()
    t = time.perf_counter()
    try:
        yield e
    finally:
        e.elapsed = time.perf_counter() - t


async def obtain(
    fn: Callable[..., Any],
    *args: Any,
    retries: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    **kwargs: Any,
) -> Result[Any]:
    """Acquire a resource with `fn(*args, **kwargs)`, retrying with
    exponential backoff.

    Only raised exceptions are retried: a call that returns, even when it
    returns an `Err`, settles the outcome. After `retries` failed retries the
    last exception comes back as an `Err`. Unset arguments are taken from
    `flowsure.config.settings()`.
    """
    cfg = settings()
    retries = cfg.retries if retries is None else retries
    delay = cfg.delay if delay is None else delay
    backoff = cfg.backoff if backoff is None else backoff
    name = getattr(fn, "__name__", repr(fn))

    attempt = 0
    while True:
        attempt += 1
        with timer() as t:
            try:
                value = fn(*args, **kwargs)
                if inspect.isawaitable(value):
                    value = await value
            except Exception as e:
                error = e
            else:
                log.debug("`%s` settled on attempt %d", name, attempt)
                return to_result(value)

        if retries < 1:
            if attempt > 1:
                log.warning("`%s` failed after %d attempts: %s", name, attempt, error)
            return Err.of(error)

        log.warning("`%s` attempt %d failed after %s: %s; retrying in %.3gs",
                    name, attempt, t, error, delay)
        await asyncio.sleep(delay)
        retries -= 1
        delay *= backoff
