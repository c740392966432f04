from dataclasses import dataclass
from typing import Any


class FlowsureError(Exception):
    def __str__(self):
        return "Unknown flowsure error."


class ConsumedReference(FlowsureError, ReferenceError):
    def __str__(self):
        return "Mutable reference has already been consumed"


@dataclass
class FlowTypeError(FlowsureError, TypeError):
    msg: str = "Expected a function in flow"

    def __str__(self):
        return self.msg


@dataclass
class WrappedError(FlowsureError):
    """A value that was raised or returned as a failure without being an
    `Exception` itself."""
    value: Any

    def __post_init__(self):
        Exception.__init__(self, self.value)

    def __str__(self):
        return str(self.value)


@dataclass
class ConfigError(FlowsureError):
    expected: str
    got: Any

    def __str__(self):
        return f"Expected {self.expected}, got: {self.got}"
