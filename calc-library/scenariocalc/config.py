"""Runtime settings read from the environment; lifecycle via get_settings / reset_settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "SCENARIOCALC_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'")


@dataclass(frozen=True)
class Settings:
    """
    Settings shared by the library and the API.

    - max_workers: threads used to evaluate scenarios of one trade (1 = sequential).
    - cache_scenario_values: memoize scenario values derived on demand.
    - log_level: level passed to logging.basicConfig by the API.
    """

    max_workers: int = 1
    cache_scenario_values: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level '{self.log_level}'")
        object.__setattr__(self, "log_level", self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read SCENARIOCALC_* variables; unset variables keep their defaults."""
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        raw = env.get(f"{ENV_PREFIX}MAX_WORKERS")
        if raw is not None:
            try:
                kwargs["max_workers"] = int(raw)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}MAX_WORKERS must be an integer, got '{raw}'"
                ) from None
        raw = env.get(f"{ENV_PREFIX}CACHE_SCENARIO_VALUES")
        if raw is not None:
            kwargs["cache_scenario_values"] = _parse_bool(
                f"{ENV_PREFIX}CACHE_SCENARIO_VALUES", raw
            )
        raw = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if raw is not None:
            kwargs["log_level"] = raw
        return cls(**kwargs)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return shared settings; read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop shared settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
