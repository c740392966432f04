from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import tomllib

from .errors import ConfigError
from .logging import logger


log = logger()


@dataclass(frozen=True)
class Settings:
    """Defaults for the retrying helpers and for payload copying.

    Can be read from the `[tool.flowsure]` section of a `pyproject.toml`:

        [tool.flowsure]
        retries = 3
        delay = 0.5
    """
    retries: int = 0
    delay: float = 1.0
    backoff: float = 2.0
    warn_on_copy: bool = True

    def __post_init__(self):
        for f in fields(self):
            v = getattr(self, f.name)
            expected = {"int": (int,), "float": (int, float), "bool": (bool,)}[f.type]
            if not isinstance(v, expected) or (f.type != "bool" and isinstance(v, bool)):
                raise ConfigError(f"`{f.name}` of type {f.type}", v)
        if self.retries < 0:
            raise ConfigError("`retries` >= 0", self.retries)
        if self.delay < 0:
            raise ConfigError("`delay` >= 0", self.delay)
        if self.backoff < 1:
            raise ConfigError("`backoff` >= 1", self.backoff)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Settings:
        known = {f.name for f in fields(Settings)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"keys from {sorted(known)}", sorted(unknown))
        return Settings(**data)

    @staticmethod
    def read(path: Path, section: str = "tool.flowsure") -> Settings:
        with open(path, "rb") as f_in:
            data = tomllib.load(f_in)
        for s in section.split("."):
            if s not in data:
                log.debug("no `[%s]` section in `%s`, using defaults", section, path)
                return Settings()
            data = data[s]
            if not isinstance(data, dict):
                raise ConfigError(f"a table for `[{section}]`", data)
        return Settings.from_dict(data)


_settings = Settings()


def settings() -> Settings:
    return _settings


def configure(**overrides: Any) -> Settings:
    global _settings
    _settings = Settings.from_dict(asdict(_settings) | overrides)
    return _settings


def reset() -> Settings:
    global _settings
    _settings = Settings()
    return _settings


def use_pyproject(path: Path = Path("pyproject.toml")) -> Settings:
    global _settings
    _settings = Settings.read(path)
    log.debug("loaded settings from `%s`: %s", path, _settings)
    return _settings
