"""Error container keeping a general error together with details and field errors.

A container can be filled explicitly, step by step, or implicitly: errors
raised from a handler are mapped to a container by a chain of mappings.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from dataclasses import field as dc_field
from enum import IntEnum
from typing import Any, Optional

from atlaskit.errors.conditions import MapCond, cond_eq


class Code(IntEnum):
    """Status codes of a remote procedure call."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    @property
    def label(self) -> str:
        """The code's conventional camel case name, e.g. ``InvalidArgument``."""
        if self is Code.OK:
            return "OK"
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label


_VERB = re.compile(r"%([-+# 0]*)(\d*)(?:\.(\d*))?([a-zA-Z%])")


def _go_str(arg: Any) -> str:
    if arg is None:
        return "<nil>"
    if isinstance(arg, bool):
        return "true" if arg else "false"
    return str(arg)


def _pad(text: str, flags: str, width: str) -> str:
    if not width:
        return text
    size = int(width)
    if "-" in flags:
        return text.ljust(size)
    return text.rjust(size, "0" if "0" in flags else " ")


def _format_arg(arg: Any, verb: str, flags: str, width: str, precision: Optional[str]) -> str:
    spec = "%" + flags + width + (f".{precision or 0}" if precision is not None else "")
    try:
        if verb in "vs":
            text = _go_str(arg)
            if verb == "s" and precision is not None:
                text = text[: int(precision or 0)]
            return _pad(text, flags, width)
        if verb == "q":
            return _pad(json.dumps(_go_str(arg), ensure_ascii=False), flags, width)
        if verb == "t" and isinstance(arg, bool):
            return _pad(_go_str(arg), flags, width)
        if verb in "dxXob" and isinstance(arg, int) and not isinstance(arg, bool):
            if verb == "b":
                return _pad(format(arg, "b"), flags, width)
            return (spec + verb) % int(arg)
        if verb in "feEgG" and isinstance(arg, (int, float)) and not isinstance(arg, bool):
            return (spec + verb) % arg
    except (TypeError, ValueError):
        pass
    return f"%!{verb}({type(arg).__name__}={_go_str(arg)})"


def _sprintf(fmt: str, *args: Any) -> str:
    """Format ``fmt`` with printf-style verbs such as %v, %s, %d and %q."""
    remaining = iter(args)

    def substitute(match: re.Match) -> str:
        flags, width, precision, verb = match.groups()
        if verb == "%":
            return "%"
        try:
            arg = next(remaining)
        except StopIteration:
            return f"%!{verb}(MISSING)"
        return _format_arg(arg, verb, flags, width, precision)

    return _VERB.sub(substitute, fmt)


@dataclass
class TargetInfo:
    """An error detail: a code and message bound to a target."""

    code: Code
    target: str
    message: str


@dataclass
class FieldInfo:
    """Per-field error messages."""

    fields: dict[str, list[str]] = dc_field(default_factory=dict)

    def add_field(self, target: str, message: str) -> None:
        """Append a message to the errors of ``target``."""
        self.fields.setdefault(target, []).append(message)


@dataclass(frozen=True)
class Status:
    """A call status: a code, a message and attached details."""

    code: Code
    message: str
    details: tuple[Any, ...] = ()


class StatusError(Exception):
    """An error that carries a call status."""

    def __init__(self, status: Status) -> None:
        super().__init__(status.message)
        self.status = status

    def grpc_status(self) -> Status:
        return self.status

    def __str__(self) -> str:
        return f"rpc error: code = {self.status.code.label} desc = {self.status.message}"


MapResult = tuple[Optional[BaseException], bool]


class MapFunc:
    """A mapping from an error to another error and a flag telling whether it applied."""

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[Any, BaseException], MapResult]) -> None:
        self._func = func

    def __call__(self, ctx: Any, err: BaseException) -> MapResult:
        result, ok = self._func(ctx, err)
        return result, bool(ok)

    def __str__(self) -> str:
        return "MapFunc"

    def __repr__(self) -> str:
        return f"MapFunc({self._func!r})"


def _is_function(value: Any) -> bool:
    return callable(value) and not isinstance(value, BaseException)


def new_mapping(src: Any, dst: Any) -> MapFunc:
    """Build a mapping from a condition or an error to a MapFunc or an error.

    An error ``src`` matches errors with the same message. A plain error
    ``dst`` (or None, to skip) is returned as is when the condition matches.
    """
    if isinstance(src, MapCond):
        condition = src
    elif _is_function(src):
        condition = MapCond(src)
    else:
        condition = cond_eq(str(src))

    if isinstance(dst, MapFunc):
        mapper = dst
    elif _is_function(dst):
        mapper = MapFunc(dst)
    else:
        mapper = MapFunc(lambda ctx, err: (dst, True))

    def mapping(ctx: Any, err: BaseException) -> MapResult:
        if condition(err):
            return mapper(ctx, err)
        return None, False

    return MapFunc(mapping)


class Mapper:
    """A chain of mappings tried in order."""

    def __init__(self, *map_funcs: MapFunc) -> None:
        self.map_funcs: list[MapFunc] = list(map_funcs)

    def map(self, ctx: Any, err: BaseException) -> Optional[BaseException]:
        """Return the result of the first mapping that applies, else an unknown error."""
        for map_func in self.map_funcs:
            result, ok = map_func(ctx, err)
            if ok:
                return result
        return init_container()

    def add_mapping(self, *args: MapFunc) -> Mapper:
        """Append mappings to the chain."""
        self.map_funcs.extend(args)
        return self


class Container(Mapper, Exception):
    """An error with a general code and message, details and per-field errors."""

    def __init__(self, code: Code = Code.UNKNOWN, fmt: str = "Unknown", *args: Any) -> None:
        Mapper.__init__(self)
        Exception.__init__(self)
        self.code = Code.UNKNOWN
        self.message = ""
        self.details: list[TargetInfo] = []
        self.fields: Optional[FieldInfo] = None
        self._err_set = False
        self.new(code, fmt, *args)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"Container(code={self.code.label}, message={self.message!r}, is_set={self._err_set})"

    @property
    def is_set(self) -> bool:
        """Whether an error was set through set, a detail or a field."""
        return self._err_set

    def new(self, code: Code, fmt: str, *args: Any) -> Container:
        """Reset the container to a general error with no details or fields."""
        self.code = Code(code)
        self.message = _sprintf(fmt, *args)
        self.args = (self.message,)
        self.details = []
        self.fields = None
        self._err_set = False
        return self

    def set(self, target: str, code: Code, fmt: str, *args: Any) -> Container:
        """Set the general error and append a detail with the same content."""
        self.code = Code(code)
        self.message = _sprintf(fmt, *args)
        self.args = (self.message,)
        self._err_set = True
        return self.with_detail(self.code, target, self.message)

    def if_set(self, code: Code, fmt: str, *args: Any) -> Optional[Container]:
        """Set the general error only if an error was set before; return self or None."""
        if not self._err_set:
            return None
        self.code = Code(code)
        self.message = _sprintf(fmt, *args)
        self.args = (self.message,)
        return self

    def with_detail(self, code: Code, target: str, fmt: str, *args: Any) -> Container:
        """Append a detail."""
        self._err_set = True
        self.details.append(TargetInfo(Code(code), target, _sprintf(fmt, *args)))
        return self

    def with_details(self, *args: TargetInfo) -> Container:
        """Append several details."""
        if not args:
            return self
        self._err_set = True
        self.details.extend(args)
        return self

    def with_field(self, target: str, fmt: str, *args: Any) -> Container:
        """Append an error message for a field."""
        self._err_set = True
        if self.fields is None:
            self.fields = FieldInfo()
        self.fields.add_field(target, _sprintf(fmt, *args))
        return self

    def with_fields(self, fields: Mapping[str, list[str]]) -> Container:
        """Append error messages for several fields, skipping empty names and messages."""
        for target, messages in fields.items():
            for message in messages:
                if message and target:
                    self.with_field(target, message)
        return self

    def grpc_status(self) -> Status:
        """Return the container as a call status, fields first and then details."""
        attached: list[Any] = []
        if self.fields is not None:
            attached.append(self.fields)
        attached.extend(self.details)
        return Status(self.code, self.message, tuple(attached))


def init_container() -> Container:
    """Return a container holding an unknown error."""
    return Container(Code.UNKNOWN, "Unknown")