from .result import (
    Ok, Nil, Err, Maybe, Result, Cases,
    maybe, to_result, result, task, unwrap,
    is_ok, is_nil, is_err, is_gone, is_maybe, is_result,
)
from .flow import flow
from .retry import obtain
from .errors import FlowsureError, ConsumedReference, FlowTypeError, WrappedError, ConfigError
from .util import tap
from .logging import configure_logger
from .version import __version__

__all__ = [
    "Ok", "Nil", "Err", "Maybe", "Result", "Cases",
    "maybe", "to_result", "result", "task", "unwrap",
    "is_ok", "is_nil", "is_err", "is_gone", "is_maybe", "is_result",
    "flow", "obtain", "tap", "configure_logger",
    "FlowsureError", "ConsumedReference", "FlowTypeError", "WrappedError", "ConfigError",
    "__version__",
]
