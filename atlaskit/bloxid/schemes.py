"""Schemes that produce the unique id portion of a bloxid."""

from __future__ import annotations

import base64
import binascii
import re
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass

from atlaskit.bloxid.hashids import (
    HASH_ID_PREFIX,
    ID_SCHEME_HASHID,
    UNIQUE_ID_DECODED_CHAR_SIZE,
    BloxIDError,
    InvalidIDError,
    get_hash_id,
)

DEFAULT_UNIQUE_ID_DECODED_CHAR_SIZE = UNIQUE_ID_DECODED_CHAR_SIZE
DEFAULT_UNIQUE_ID_ENCODED_CHAR_SIZE = DEFAULT_UNIQUE_ID_DECODED_CHAR_SIZE * 5 // 8
DEFAULT_UNIQUE_ID_BYTE_SIZE = DEFAULT_UNIQUE_ID_DECODED_CHAR_SIZE // 2
DEFAULT_ENTROPY_SIZE = DEFAULT_UNIQUE_ID_DECODED_CHAR_SIZE

ID_SCHEME_EXTRINSIC = "extrinsic"
ID_SCHEME_RANDOM = "random"

# Upper case so it cannot collide with the lower case encoded characters.
EXTRINSIC_ID_PREFIX = "EXTR"

RANDOM_ENCODED_ID_SIZE = 32

_EXTRINSIC_ID_PATTERN = re.compile(r"[0-9A-Za-z_-]+")
_RANDOM_ENCODED_ID_PATTERN = re.compile(r"[0-9a-z]+")
_BASE32_BLOCK = 5


class EmptyExtrinsicIDError(BloxIDError):
    default_message = "empty extrinsic id"


class InvalidExtrinsicIDError(BloxIDError):
    default_message = "invalid extrinsic id"


class EmptyRandomEncodedIDError(BloxIDError):
    default_message = "empty random scheme encoded id"


class InvalidSizeRandomEncodedIDError(BloxIDError):
    default_message = f"random scheme encoded id must be {RANDOM_ENCODED_ID_SIZE} chars"


class InvalidAlphabetRandomEncodedIDError(BloxIDError):
    default_message = "invalid random scheme encoded id"


class InvalidRandomEncodedIDError(BloxIDError):
    default_message = "invalid random scheme encoded id"


@dataclass(frozen=True)
class SchemeResult:
    """The scheme name with the decoded and encoded forms of a unique id."""

    scheme: str
    decoded: str
    encoded: str


class Schemer(ABC):
    """Produces the unique id portion of a bloxid."""

    @abstractmethod
    def from_entity_id(self, salt: str) -> SchemeResult:
        """Return the scheme, decoded and encoded id; raise BloxIDError on bad input."""


def rand_bytes(size: int) -> bytes:
    """Return ``size`` cryptographically secure random bytes."""
    return secrets.token_bytes(size)


def rand_default() -> bytes:
    """Return random bytes of the default unique id size."""
    return rand_bytes(DEFAULT_UNIQUE_ID_BYTE_SIZE)


def encode_lower_alphanumeric(prefix: str, decoded: str) -> str:
    """Space-pad ``prefix + decoded`` and return its lower case base32 form, without '='."""
    raw = (prefix + decoded).encode()
    pad = _BASE32_BLOCK - (len(raw) % _BASE32_BLOCK)
    return base64.b32encode(raw + b" " * pad).decode("ascii").lower()


def get_extrinsic_id(id_: str) -> str:
    """Validate and return an extrinsic id."""
    if not id_:
        raise EmptyExtrinsicIDError()
    if not _EXTRINSIC_ID_PATTERN.fullmatch(id_):
        raise InvalidExtrinsicIDError()
    return id_


def decoded_from_random_encoded_id(id_: str) -> str:
    """Return the hex form of a lower case base32 random scheme id."""
    if not id_:
        raise EmptyRandomEncodedIDError()
    if len(id_) != RANDOM_ENCODED_ID_SIZE:
        raise InvalidSizeRandomEncodedIDError()
    if not _RANDOM_ENCODED_ID_PATTERN.fullmatch(id_):
        raise InvalidAlphabetRandomEncodedIDError()
    try:
        raw = base64.b32decode(id_.upper())
    except (binascii.Error, ValueError):
        raise InvalidRandomEncodedIDError() from None
    return raw.hex()


@dataclass(frozen=True)
class ExtrinsicID(Schemer):
    """A locally unique id that is not randomly generated."""

    extrinsic_id: str

    def from_entity_id(self, salt: str) -> SchemeResult:
        decoded = get_extrinsic_id(self.extrinsic_id)
        encoded = encode_lower_alphanumeric(EXTRINSIC_ID_PREFIX, decoded)
        return SchemeResult(ID_SCHEME_EXTRINSIC, decoded, encoded)


@dataclass(frozen=True)
class RandomEncodedID(Schemer):
    """The unique id portion of a previously generated random scheme bloxid."""

    encoded_id: str

    def from_entity_id(self, salt: str) -> SchemeResult:
        decoded = decoded_from_random_encoded_id(self.encoded_id)
        return SchemeResult(ID_SCHEME_RANDOM, decoded, self.encoded_id)


@dataclass(frozen=True)
class HashIDInt64(Schemer):
    """A non-negative int64 hidden behind a salted hashid."""

    value: int

    def from_entity_id(self, salt: str) -> SchemeResult:
        if self.value < 0:
            raise InvalidIDError()
        hashed = get_hash_id(self.value, salt)
        encoded = encode_lower_alphanumeric(HASH_ID_PREFIX, hashed)
        return SchemeResult(ID_SCHEME_HASHID, str(self.value), encoded)