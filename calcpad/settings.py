"""Environment-driven settings for calcpad.

Every knob comes from a ``CALCPAD_*`` variable with a built-in default, so a
bare environment gives the stock calculator behaviour.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class Settings:
    """Resolved calcpad settings."""

    error_token: str = "Error"
    empty_token: str = "0"
    log_level: int = logging.WARNING


def _parse_level(name: str) -> int:
    """Map a level name to its logging constant, falling back to WARNING."""
    return _LOG_LEVELS.get(name.strip().upper(), logging.WARNING)


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or an explicit mapping).

    Args:
        env: Variables to read. Defaults to os.environ.
    """
    env = os.environ if env is None else env
    return Settings(
        error_token=env.get("CALCPAD_ERROR_TOKEN") or "Error",
        empty_token=env.get("CALCPAD_EMPTY_TOKEN") or "0",
        log_level=_parse_level(env.get("CALCPAD_LOG_LEVEL", "WARNING")),
    )
