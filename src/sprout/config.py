"""Global configuration for sprout.

This module provides the package-wide configuration surface: logging level,
environment-variable helpers and the default random source used by growth.
It exposes a dynamic `rng` proxy that always reflects the currently installed
generator, so code importing it sees reseeds and temporary overrides.
"""

from __future__ import annotations

import contextlib
import logging
import os
from typing import Any, ContextManager, Iterator, Optional

import numpy as np


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
_LOGGER = logging.getLogger("sprout.config")


def _parse_log_level(val: str | int | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string or int into a `logging` level constant.

    Args:
        val: The desired level (e.g., "DEBUG", 10). May be None.
        default: Fallback level if `val` cannot be parsed.

    Returns:
        An integer logging level (e.g., logging.DEBUG).
    """
    if val is None:
        return default
    if isinstance(val, int):
        return val
    lvl = getattr(logging, str(val).upper(), None)
    if isinstance(lvl, int):
        return lvl
    return default


def set_log_level(level: str | int = "WARNING") -> None:
    """Set the package logger level programmatically.

    Args:
        level: A standard logging level name or integer.
    """
    logging.getLogger("sprout").setLevel(_parse_log_level(level))


# Default level can be overridden by env.
set_log_level(os.getenv("SPROUT_LOGLEVEL", "WARNING"))


# -----------------------------------------------------------------------------
# Env helpers
# -----------------------------------------------------------------------------
def bool_env(varname: str, default: bool) -> bool:
    """Read an environment variable and interpret it as a boolean.

    True values: 'y', 'yes', 't', 'true', 'on', '1'.
    False values: 'n', 'no', 'f', 'false', 'off', '0'.

    Args:
        varname: The name of the environment variable.
        default: The default value if the variable is unset.

    Returns:
        A boolean value parsed from the environment.
    """
    val = os.getenv(varname, str(default))
    val = val.lower()
    if val in ("y", "yes", "t", "true", "on", "1"):
        return True
    if val in ("n", "no", "f", "false", "off", "0"):
        return False
    raise ValueError(f"invalid truth value {val!r} for environment {varname!r}")


def int_env(varname: str, default: int) -> int:
    """Read an environment variable and interpret it as an integer."""
    return int(os.getenv(varname, str(default)))


def float_env(varname: str, default: float) -> float:
    """Read an environment variable and interpret it as a float."""
    return float(os.getenv(varname, str(default)))


def make_rng(s: int) -> np.random.Generator:
    """Return an independent PCG64 generator seeded with `s`."""
    return np.random.Generator(np.random.PCG64(s))


# -----------------------------------------------------------------------------
# Config singleton + dynamic proxy
# -----------------------------------------------------------------------------
class Config:
    """Global configuration for sprout.

    Holds the default random source. Growth functions accept an explicit
    generator; this one is only consulted when the caller passes none.
    """

    def __init__(self) -> None:
        """Initialize config using environment defaults."""
        self._seed_default = int_env("SPROUT_SEED", 1234)
        self._rng: np.random.Generator = make_rng(self._seed_default)
        _LOGGER.info("Config initialized: seed=%d", self._seed_default)

    def seed(self, s: Optional[int] = None) -> None:
        """Reseed the default generator deterministically.

        Args:
            s: The seed value (defaults to the environment default).
        """
        seed_value = self._seed_default if s is None else int(s)
        _LOGGER.info("Reseeding RNG to %d", seed_value)
        self._rng = make_rng(seed_value)

    @contextlib.contextmanager
    def use(self, *, seed: Optional[int] = None) -> Iterator[np.random.Generator]:
        """Temporarily install a freshly seeded generator.

        Args:
            seed: Seed for the temporary generator.

        Yields:
            The temporary generator. The previous one is restored on exit.
        """
        prev = self._rng
        try:
            self.seed(seed)
            yield self._rng
        finally:
            self._rng = prev
            _LOGGER.info("Restored previous RNG")

    @property
    def seed_default(self) -> int:
        """Return the seed picked up from the environment."""
        return self._seed_default

    @property
    def rng(self) -> np.random.Generator:
        """Return the active generator."""
        return self._rng


class _RNGProxy:
    """Proxy for `rng` that forwards attribute access to the current generator."""

    def __init__(self, _cfg: Config) -> None:
        self._cfg = _cfg

    def __getattr__(self, name: str) -> Any:  # noqa: D401
        return getattr(self._cfg.rng, name)


# Singleton & forwards
config = Config()
rng = _RNGProxy(config)


def default_rng() -> np.random.Generator:
    """Return the currently configured generator (module-level)."""
    return config.rng


def seed(s: Optional[int] = None) -> None:
    """Reseed the default generator deterministically (module-level)."""
    config.seed(s)


def use(*, seed: Optional[int] = None) -> ContextManager[np.random.Generator]:
    """Temporarily install a freshly seeded generator (module-level)."""
    return config.use(seed=seed)
