"""Mappings from PostgreSQL errors to error containers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from atlaskit.errors.conditions import MapCond, cond_and
from atlaskit.errors.container import Code, Container, MapFunc, MapResult, new_mapping

MSG_FOREIGN_KEY_VIOLATION = (
    "Cannot insert object '%s' as it does not refer to a valid '%s' object."
)
MSG_RESTRICT_VIOLATION = (
    "Cannot update or delete an object '%s' as it is referenced by a '%s' object."
)
MSG_NOT_NULL_VIOLATION = "The '%s' field for the '%s' object cannot be empty."
MSG_UNIQUE_VIOLATION = "There is already an existing '%s' object with the same '%s'."

FOREIGN_KEY_VIOLATION = "23503"
RESTRICT_VIOLATION = "23001"
NOT_NULL_VIOLATION = "23502"
UNIQUE_VIOLATION = "23505"


class PgError(Exception):
    """An error reported by a PostgreSQL server."""

    def __init__(
        self,
        *,
        code: str = "",
        constraint: str = "",
        detail: str = "",
        message: str = "",
        severity: str = "",
    ) -> None:
        self.code = code
        self.constraint = constraint
        self.detail = detail
        self.message = message
        self.severity = severity
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.severity}: {self.message} (SQLSTATE {self.code})"

    def __repr__(self) -> str:
        return (
            f"PgError(code={self.code!r}, constraint={self.constraint!r}, "
            f"detail={self.detail!r}, message={self.message!r}, severity={self.severity!r})"
        )


def to_map_func(f: Callable[[Any, PgError], MapResult]) -> MapFunc:
    """Turn a mapping of PgError into a mapping of any error."""

    def mapping(ctx: Any, err: BaseException) -> MapResult:
        if isinstance(err, PgError):
            return f(ctx, err)
        return err, False

    return MapFunc(mapping)


def cond_pg_error() -> MapCond:
    """Match any PgError."""
    return MapCond(lambda err: isinstance(err, PgError))


def cond_constraint_eq(constraint: str) -> MapCond:
    """Match a PgError raised by the named constraint."""
    return MapCond(lambda err: isinstance(err, PgError) and err.constraint == constraint)


def cond_code_eq(code: str) -> MapCond:
    """Match a PgError with the given SQLSTATE code."""
    return MapCond(lambda err: isinstance(err, PgError) and err.code == code)


def _constraint_mapping(code: str, constraint: str, target: Container) -> MapFunc:
    return new_mapping(cond_and(cond_code_eq(code), cond_constraint_eq(constraint)), target)


def new_foreign_key_mapping(constraint: str, t1: str, t2: str) -> MapFunc:
    """Map a foreign key violation of ``constraint``; ``t1`` refers to ``t2``."""
    return _constraint_mapping(
        FOREIGN_KEY_VIOLATION,
        constraint,
        Container(Code.INVALID_ARGUMENT, MSG_FOREIGN_KEY_VIOLATION, t1, t2),
    )


def new_restrict_mapping(constraint: str, t1: str, t2: str) -> MapFunc:
    """Map a restrict violation of ``constraint``; ``t1`` is referenced by ``t2``."""
    return _constraint_mapping(
        RESTRICT_VIOLATION,
        constraint,
        Container(Code.INVALID_ARGUMENT, MSG_RESTRICT_VIOLATION, t1, t2),
    )


def new_not_null_mapping(constraint: str, table: str, column: str) -> MapFunc:
    """Map a not-null violation of ``constraint`` on ``table``.``column``."""
    return _constraint_mapping(
        NOT_NULL_VIOLATION,
        constraint,
        Container(Code.INVALID_ARGUMENT, MSG_NOT_NULL_VIOLATION, column, table),
    )


def new_unique_mapping(constraint: str, table: str, column: str) -> MapFunc:
    """Map a unique violation of ``constraint`` on ``table``.``column``."""
    return _constraint_mapping(
        UNIQUE_VIOLATION,
        constraint,
        Container(Code.ALREADY_EXISTS, MSG_UNIQUE_VIOLATION, table, column),
    )