"""Reading fields of the JWT carried in request metadata.

Metadata is either a mapping of header names to a value or a list of values,
or an iterable of ``(name, value)`` pairs. Header names match regardless of
case. A ``keyfunc`` is called as ``keyfunc(header, claims)`` with the
unverified token header and claims and returns the key to verify it with.
Without a ``keyfunc`` the token is parsed but not verified, on the assumption
that it was checked earlier in the stack.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from typing import Any, Optional, Union

import jwt

MULTI_TENANCY_FIELD = "account_id"
AUTHORIZATION_HEADER = "Authorization"
DEFAULT_TOKEN_TYPE = "Bearer"

MULTI_TENANCY_VARIANTS = (MULTI_TENANCY_FIELD, "AccountID")

Metadata = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]
KeyFunc = Callable[[dict, dict], Any]


class AuthError(Exception):
    """Reading the token or one of its fields failed."""

    default_message = "authentication error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class MissingTokenError(AuthError):
    default_message = "unable to get token from context"


class MissingFieldError(AuthError):
    default_message = "unable to get field from token"


class InvalidAssertionError(AuthError):
    default_message = "unable to assert token as jwt.MapClaims"


def _first_value(metadata: Metadata, name: str) -> str:
    items = metadata.items() if isinstance(metadata, Mapping) else metadata
    wanted = name.lower()
    for key, value in items:
        if key.lower() != wanted:
            continue
        values = [value] if isinstance(value, (str, bytes)) else list(value)
        for item in values:
            return item.decode() if isinstance(item, bytes) else str(item)
    return ""


def auth_from_metadata(metadata: Metadata, expected_scheme: str) -> str:
    """Return the credentials of the authorization header with the given scheme."""
    value = _first_value(metadata, AUTHORIZATION_HEADER)
    if not value:
        raise AuthError(f"Request unauthenticated with {expected_scheme}")
    scheme, separator, credentials = value.partition(" ")
    if not separator:
        raise AuthError("Bad authorization string")
    if scheme.casefold() != expected_scheme.casefold():
        raise AuthError(f"Request unauthenticated with {expected_scheme}")
    return credentials


def _get_claims(
    metadata: Optional[Metadata], token_type: str, keyfunc: Optional[KeyFunc]
) -> Any:
    if metadata is None:
        raise MissingTokenError()
    token = auth_from_metadata(metadata, token_type)
    try:
        unverified = jwt.decode(token, options={"verify_signature": False})
        if keyfunc is None:
            return unverified
        header = jwt.get_unverified_header(token)
        try:
            key = keyfunc(header, unverified)
        except Exception as exc:
            raise AuthError(f"key lookup failed: {exc}") from exc
        return jwt.decode(
            token,
            key,
            algorithms=[header.get("alg", "")],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as exc:
        raise AuthError(str(exc)) from exc


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _format_number(value: int | float) -> str:
    try:
        return _format_float(float(value))
    except OverflowError:
        return str(value)


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, list):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    if isinstance(value, dict):
        entries = (f"{key}:{_format_value(value[key])}" for key in sorted(value))
        return "map[" + " ".join(entries) + "]"
    return str(value)


def get_jwt_field_with_token_type(
    metadata: Optional[Metadata],
    token_type: str,
    token_field: str,
    keyfunc: Optional[KeyFunc] = None,
) -> str:
    """Return a claim of the token sent with the given scheme, as a string."""
    try:
        claims = _get_claims(metadata, token_type, keyfunc)
    except AuthError:
        raise MissingTokenError() from None
    if not isinstance(claims, dict):
        raise InvalidAssertionError()
    if token_field not in claims:
        raise MissingFieldError()
    return _format_value(claims[token_field])


def get_jwt_field(
    metadata: Optional[Metadata], token_field: str, keyfunc: Optional[KeyFunc] = None
) -> str:
    """Return a claim of the bearer token, as a string."""
    return get_jwt_field_with_token_type(metadata, DEFAULT_TOKEN_TYPE, token_field, keyfunc)


def get_account_id(metadata: Optional[Metadata], keyfunc: Optional[KeyFunc] = None) -> str:
    """Return the tenant's account id from the bearer token."""
    for tenant_field in MULTI_TENANCY_VARIANTS:
        try:
            return get_jwt_field(metadata, tenant_field, keyfunc)
        except AuthError:
            continue
    raise MissingFieldError()