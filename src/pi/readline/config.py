"""Configuration for the line editor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Mapping, TypeVar

logger = logging.getLogger(__name__)

ENV_PREFIX = "PI_READLINE_"

T = TypeVar("T")


@dataclass
class ReadlineConfig:
    """Tunables for :class:`~pi.readline.session.EditSession`."""

    # Seconds to wait for input before re-arming the wait.
    wait_timeout: float = 30.0
    # Seconds to wait for the rest of a partial key sequence.
    escape_timeout: float = 0.05
    # Maximum bytes read from the source per call.
    chunk_size: int = 512
    # Oldest history entries are dropped beyond this many; None is unlimited.
    history_size: int | None = None
    # When set, every write to the terminal is appended to this file.
    write_log: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ReadlineConfig:
        """Build a config from ``PI_READLINE_*`` environment variables."""
        env = os.environ if environ is None else environ
        config = cls()

        config.wait_timeout = _read(env, "WAIT_TIMEOUT", float, config.wait_timeout)
        config.escape_timeout = _read(env, "ESCAPE_TIMEOUT", float, config.escape_timeout)
        config.chunk_size = _read(env, "CHUNK_SIZE", int, config.chunk_size)
        config.history_size = _read(env, "HISTORY_SIZE", int, config.history_size)
        config.write_log = env.get(ENV_PREFIX + "WRITE_LOG", config.write_log)
        return config


def _read(env: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        value = parse(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s%s=%r", ENV_PREFIX, name, raw)
        return default
    if value <= 0:  # type: ignore[operator]
        logger.warning("Ignoring non-positive %s%s=%r", ENV_PREFIX, name, raw)
        return default
    return value
