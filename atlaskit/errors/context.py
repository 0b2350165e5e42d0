"""Access to the error container stored in a request context.

A context is a mapping; :func:`new_context` returns a copy holding the
container, and the other functions act on the container found in it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from atlaskit.errors.container import Code, Container, TargetInfo

DEFAULT_ERROR_CONTAINER_KEY = "Error-Container"


def new_context(ctx: Optional[Mapping[str, Any]], container: Container) -> dict[str, Any]:
    """Return a copy of ``ctx`` with the error container stored in it."""
    result = dict(ctx) if ctx else {}
    result[DEFAULT_ERROR_CONTAINER_KEY] = container
    return result


def from_context(ctx: Optional[Mapping[str, Any]]) -> Optional[Container]:
    """Return the error container stored in ``ctx``, or None."""
    if ctx is None:
        return None
    value = ctx.get(DEFAULT_ERROR_CONTAINER_KEY)
    if value is None:
        return None
    if not isinstance(value, Container):
        raise TypeError(f"context value {DEFAULT_ERROR_CONTAINER_KEY!r} is not a Container")
    return value


def _container(ctx: Optional[Mapping[str, Any]]) -> Container:
    container = from_context(ctx)
    if container is None:
        raise LookupError("no error container in context")
    return container


def detail(ctx: Mapping[str, Any], code: Code, target: str, fmt: str, *args: Any) -> Container:
    """Append a detail to the context's error container."""
    return _container(ctx).with_detail(code, target, fmt, *args)


def details(ctx: Mapping[str, Any], *args: TargetInfo) -> Container:
    """Append several details to the context's error container."""
    return _container(ctx).with_details(*args)


def field(ctx: Mapping[str, Any], target: str, fmt: str, *args: Any) -> Container:
    """Append a field error to the context's error container."""
    return _container(ctx).with_field(target, fmt, *args)


def fields(ctx: Mapping[str, Any], items: Mapping[str, list[str]]) -> Container:
    """Append several field errors to the context's error container."""
    return _container(ctx).with_fields(items)


def new(ctx: Mapping[str, Any], code: Code, fmt: str, *args: Any) -> Container:
    """Replace any error in the context's container with a new general error."""
    return _container(ctx).new(code, fmt, *args)


def set_error(ctx: Mapping[str, Any], target: str, code: Code, fmt: str, *args: Any) -> Container:
    """Set the general error of the context's container and append a matching detail."""
    return _container(ctx).set(target, code, fmt, *args)


def if_set(ctx: Mapping[str, Any], code: Code, fmt: str, *args: Any) -> Optional[Container]:
    """Set the general error only if an error was set before."""
    return _container(ctx).if_set(code, fmt, *args)


def error(ctx: Mapping[str, Any]) -> Optional[Container]:
    """Return the context's container if any error was set in it, else None."""
    container = _container(ctx)
    return container if container.is_set else None


def map_error(ctx: Mapping[str, Any], err: BaseException) -> Optional[BaseException]:
    """Map ``err`` through the mappings of the context's container."""
    return _container(ctx).map(ctx, err)