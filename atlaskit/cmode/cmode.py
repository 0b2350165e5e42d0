"""A small HTTP endpoint for reading and changing runtime options.

``GET /cmode`` prints usage, ``GET /cmode/values`` prints the current
values, and ``POST /cmode/values?NAME=VALUE`` changes them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Optional, Union
from urllib.parse import parse_qs

URL_PATH = "/cmode"
VALUES_URL_PATH = URL_PATH + "/values"

CONTENT_TYPE = "text/plain; charset=utf-8"

Query = Union[str, Mapping[str, Any], None]


class CModeOpt(ABC):
    """A runtime option.

    ``name`` must be unique and is used in the URL, ``description`` is shown
    in the usage, and ``valid_values`` lists the values that may be set.
    """

    name: str = ""
    description: str = ""
    valid_values: Sequence[str] = ()

    @abstractmethod
    def get(self) -> str:
        """Return the current value as shown by ``GET /cmode/values``."""

    @abstractmethod
    def parse_and_set(self, value: str) -> None:
        """Set the option from one of its valid values; raise on failure."""


@dataclass(frozen=True)
class Reply:
    """An HTTP reply: a status code and a plain text body."""

    status: int
    body: str
    content_type: str = CONTENT_TYPE


def _first_value(query: Query, name: str) -> str:
    if query is None:
        return ""
    if isinstance(query, str):
        return parse_qs(query, keep_blank_values=True).get(name, [""])[0]
    value = query.get(name)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    values = list(value)
    return str(values[0]) if values else ""


class CMode:
    """Serves the option endpoints for a set of options.

    With no logger, changes and failures are not logged.
    """

    def __init__(self, logger: Optional[logging.Logger], *args: CModeOpt) -> None:
        self._logger = logger
        self.opts: tuple[CModeOpt, ...] = tuple(args)
        self.usage: tuple[str, ...] = self._generate_usage()
        self._routes: dict[str, dict[str, Callable[[Query], Reply]]] = {
            URL_PATH: {"GET": self._help},
            VALUES_URL_PATH: {"GET": self._get, "POST": self._set},
        }

    def _log_error(self, msg: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.error(msg, *args)

    def _log_info(self, msg: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.info(msg, *args)

    @staticmethod
    def _opt_path(opt: CModeOpt) -> str:
        return f"{VALUES_URL_PATH}?{opt.name}=${opt.name.upper()}"

    def _generate_usage(self) -> tuple[str, ...]:
        width = max([len(VALUES_URL_PATH), *(len(self._opt_path(opt)) for opt in self.opts)])
        usage = [
            "Usage:",
            f"GET  {URL_PATH.ljust(width)} -- print usage",
            f"GET  {VALUES_URL_PATH.ljust(width)} -- get current values",
        ]
        if self.opts:
            usage.extend(
                f"POST {self._opt_path(opt).ljust(width)} -- {opt.description}"
                for opt in self.opts
            )
            usage.append("")
            usage.extend(
                f"valid {opt.name} values: [ {', '.join(opt.valid_values)} ]"
                for opt in self.opts
            )
        return tuple(usage)

    @staticmethod
    def _reply(status: int, lines: Sequence[str]) -> Reply:
        return Reply(status, "\n".join(lines) + "\n")

    def _help(self, query: Query) -> Reply:
        return self._reply(HTTPStatus.OK, self.usage)

    def _get(self, query: Query) -> Reply:
        return self._reply(HTTPStatus.OK, [f"{opt.name}: {opt.get()}" for opt in self.opts])

    def _set(self, query: Query) -> Reply:
        reply: list[str] = []
        provided = False
        for opt in self.opts:
            value = _first_value(query, opt.name)
            if not value:
                continue
            provided = True

            if value not in opt.valid_values:
                text = f"invalid {opt.name} value: {value}"
                self._log_error("%s", text)
                return self._reply(HTTPStatus.BAD_REQUEST, [*reply, text, *self.usage])

            try:
                opt.parse_and_set(value)
            except Exception as err:
                self._log_error("%s", err)
                return self._reply(
                    HTTPStatus.INTERNAL_SERVER_ERROR, [*reply, "unexpected server error"]
                )

            reply.append(f"{opt.name} is set to {value}")
            self._log_info("%s is set to %s", opt.name, value)

        if not provided:
            return self._reply(HTTPStatus.BAD_REQUEST, self.usage)
        return self._reply(HTTPStatus.OK, reply)

    def handle(self, method: str, path: str, query: Query = None) -> Reply:
        """Serve one request and return the reply."""
        handlers = self._routes.get(path)
        if handlers is None:
            return Reply(HTTPStatus.NOT_FOUND, "404 page not found\n")
        handler = handlers.get(method.upper())
        if handler is None:
            return Reply(HTTPStatus.METHOD_NOT_ALLOWED, "")
        return handler(query)

    def __call__(self, environ: Mapping[str, Any], start_response: Callable) -> list[bytes]:
        """Serve the endpoints as a WSGI application."""
        reply = self.handle(
            environ.get("REQUEST_METHOD", "GET"),
            environ.get("PATH_INFO", "") or "/",
            environ.get("QUERY_STRING", ""),
        )
        body = reply.body.encode("utf-8")
        status = HTTPStatus(reply.status)
        start_response(
            f"{status.value} {status.phrase}",
            [("Content-Type", reply.content_type), ("Content-Length", str(len(body)))],
        )
        return [body]