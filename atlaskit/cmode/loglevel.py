"""Runtime option that changes the level of a logger."""

from __future__ import annotations

import logging
from typing import Optional

from atlaskit.cmode.cmode import CModeOpt

TRACE = 5
PANIC = logging.CRITICAL + 10

LEVELS: dict[str, int] = {
    "panic": PANIC,
    "fatal": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_ALIASES = {"warn": "warning"}


class LogLevelOption(CModeOpt):
    """Exposes the level of a ``logging.Logger`` as the ``loglevel`` option."""

    name = "loglevel"
    description = "set logging level"
    valid_values = tuple(LEVELS)

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger()

    def get(self) -> str:
        """Return the name of the logger's effective level."""
        effective = self.logger.getEffectiveLevel()
        for level_name, level in sorted(LEVELS.items(), key=lambda item: item[1]):
            if level >= effective:
                return level_name
        return "panic"

    def parse_and_set(self, value: str) -> None:
        """Set the logger's level from its name; raise ValueError for unknown names."""
        level_name = value.lower()
        level_name = _ALIASES.get(level_name, level_name)
        try:
            level = LEVELS[level_name]
        except KeyError:
            raise ValueError(f"not a valid logrus Level: {value!r}") from None
        self.logger.setLevel(level)