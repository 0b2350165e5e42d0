"""Server interceptor that turns handler errors into error containers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from atlaskit.errors.container import Container, MapFunc, init_container
from atlaskit.errors.context import new_context

Handler = Callable[[Any, Any], Any]
Interceptor = Callable[[Any, Any, Any, Handler], Any]


def _carries_status(err: BaseException) -> bool:
    return callable(getattr(err, "grpc_status", None))


def unary_server_interceptor(*args: MapFunc) -> Interceptor:
    """Return an interceptor that maps handler errors with the given mappings.

    The handler is called with a context holding a fresh error container.
    Containers and errors carrying a call status are raised unchanged; other
    errors are mapped and the result raised, unless the mapping yields None,
    in which case the call returns None.
    """
    map_funcs = tuple(args)

    def interceptor(ctx: Any, req: Any, info: Any, handler: Handler) -> Optional[Any]:
        container = init_container()
        mapper = container.add_mapping(*map_funcs)
        ctx = new_context(ctx, container)

        try:
            return handler(ctx, req)
        except Container:
            raise
        except Exception as err:
            if _carries_status(err):
                raise
            mapped = mapper.map(ctx, err)
            if mapped is not None:
                raise mapped from err
            return None

    return interceptor