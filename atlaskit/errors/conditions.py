"""Conditions that decide whether an error mapping applies to an error."""

from __future__ import annotations

import re
from collections.abc import Callable


class MapCond:
    """A predicate over an error, telling whether a mapping condition is met."""

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Callable[[BaseException], bool]) -> None:
        self._predicate = predicate

    def __call__(self, err: BaseException) -> bool:
        return bool(self._predicate(err))

    def __str__(self) -> str:
        return "MapCond"

    def __repr__(self) -> str:
        return f"MapCond({self._predicate!r})"


def cond_eq(src: str) -> MapCond:
    """Match errors whose message equals ``src``."""
    return MapCond(lambda err: str(err) == src)


def cond_re_match(pattern: str) -> MapCond:
    """Match errors whose message contains a match of the regular expression."""

    def predicate(err: BaseException) -> bool:
        try:
            return re.search(pattern, str(err)) is not None
        except re.error:
            return False

    return MapCond(predicate)


def cond_has_suffix(suffix: str) -> MapCond:
    """Match errors whose message ends with ``suffix``."""
    return MapCond(lambda err: str(err).endswith(suffix))


def cond_has_prefix(prefix: str) -> MapCond:
    """Match errors whose message starts with ``prefix``."""
    return MapCond(lambda err: str(err).startswith(prefix))


def cond_not(mc: MapCond) -> MapCond:
    """Invert a condition."""
    return MapCond(lambda err: not mc(err))


def cond_and(*args: MapCond) -> MapCond:
    """Match only when every condition matches."""
    conditions = tuple(args)
    return MapCond(lambda err: all(cond(err) for cond in conditions))


def cond_or(*args: MapCond) -> MapCond:
    """Match when at least one condition matches."""
    conditions = tuple(args)
    return MapCond(lambda err: any(cond(err) for cond in conditions))