"""Validation errors: a request interceptor and mappings to error containers."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from atlaskit.errors.conditions import MapCond
from atlaskit.errors.container import Code, Container, MapFunc, MapResult, new_mapping

Handler = Callable[[Any, Any], Any]
Interceptor = Callable[[Any, Any, Any, Handler], Any]

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")


def _camel_to_snake(name: str) -> str:
    name = _ACRONYM_WORD.sub(r"\1_\2", name)
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    return name.lower()


@runtime_checkable
class RequestValidationError(Protocol):
    """An error telling which field of a request failed validation and why."""

    field: str
    reason: str
    key: bool
    cause: Optional[BaseException]

    def error_name(self) -> str: ...


@dataclass
class ValidationError(Exception):
    """A failed validation of a field, with the reason and underlying cause."""

    field: str = ""
    reason: str = ""
    cause: Optional[BaseException] = None
    key: bool = False

    def error_name(self) -> str:
        return "ValidationError"

    def __str__(self) -> str:
        cause = f" | caused by: {self.cause}" if self.cause is not None else ""
        key = "key for " if self.key else ""
        return f"invalid {key}ValidationError.{self.field}: {self.reason}{cause}"


def get_validation_error(err: BaseException) -> BaseException:
    """Return the nested validation error of ``err`` as a ValidationError, else ``err``."""
    if isinstance(err, RequestValidationError):
        cause = err.cause
        if isinstance(cause, RequestValidationError):
            return ValidationError(
                field=_camel_to_snake(cause.field),
                reason=cause.reason,
                cause=cause.cause,
                key=cause.key,
            )
    return err


def unary_server_interceptor() -> Interceptor:
    """Return an interceptor that validates requests before calling the handler.

    A request with a ``validate()`` method is validated first; the error it
    raises is raised in turn, converted by :func:`get_validation_error`.
    """

    def interceptor(ctx: Any, req: Any, info: Any, handler: Handler) -> Any:
        validate = getattr(req, "validate", None)
        if callable(validate):
            try:
                validate()
            except Exception as err:
                raise get_validation_error(err) from err
        return handler(ctx, req)

    return interceptor


def to_map_func(f: Callable[[Any, ValidationError], MapResult]) -> MapFunc:
    """Turn a mapping of ValidationError into a mapping of any error."""

    def mapping(ctx: Any, err: BaseException) -> MapResult:
        if isinstance(err, ValidationError):
            return f(ctx, err)
        return err, False

    return MapFunc(mapping)


def cond_validation() -> MapCond:
    """Match a ValidationError that names a field and a reason."""
    return MapCond(
        lambda err: isinstance(err, ValidationError) and bool(err.field) and bool(err.reason)
    )


def cond_field_eq(field: str) -> MapCond:
    """Match a ValidationError of the given field."""
    return MapCond(lambda err: isinstance(err, ValidationError) and err.field == field)


def cond_reason_eq(reason: str) -> MapCond:
    """Match a ValidationError with the given reason."""
    return MapCond(lambda err: isinstance(err, ValidationError) and err.reason == reason)


def _default(ctx: Any, err: BaseException) -> MapResult:
    assert isinstance(err, ValidationError)
    container = Container(Code.INVALID_ARGUMENT, "Invalid %s: %s", err.field, err.reason)
    return container.with_field(err.field, err.reason), True


def default_mapping() -> MapFunc:
    """Map validation errors to an invalid-argument container with a field error."""
    return new_mapping(cond_validation(), MapFunc(_default))