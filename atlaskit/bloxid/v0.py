"""Versioned typed guids that identify resource objects globally.

A bloxid names its version, entity domain, entity type, an optional realm
and a unique id, joined by dots, for example
``blox0.infra.host.us-com-1.<encoded id>``. The unique id is produced by a
scheme: random bytes (the default), an extrinsic id or a salted hashid.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum

from atlaskit.bloxid.hashids import (
    HASH_ID_PREFIX,
    ID_SCHEME_HASHID,
    BloxIDError,
    get_int64_from_hash_id,
)
from atlaskit.bloxid.schemes import (
    DEFAULT_UNIQUE_ID_ENCODED_CHAR_SIZE,
    EXTRINSIC_ID_PREFIX,
    ID_SCHEME_EXTRINSIC,
    ID_SCHEME_RANDOM,
    HashIDInt64,
    Schemer,
    rand_default,
)

UNIQUE_ID_ENCODED_MIN_CHAR_SIZE = 16
V0_DELIMITER = "."

_BLOXID_TYPE_LEN = 4
_HASH_ID_PREFIX_BYTES = HASH_ID_PREFIX.encode("ascii")
_EXTRINSIC_ID_PREFIX_BYTES = EXTRINSIC_ID_PREFIX.encode("ascii")


class Version(Enum):
    """Version of a bloxid, named as it appears in the serialized id."""

    UNKNOWN = "unknown"
    V0 = "blox0"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Version:
        """Return the version with the given name, or UNKNOWN."""
        try:
            return cls(name)
        except ValueError:
            return cls.UNKNOWN


class InvalidVersionError(BloxIDError):
    default_message = "invalid bloxid version"


class InvalidEntityDomainError(BloxIDError):
    default_message = "entity domain must be non-empty"


class InvalidEntityTypeError(BloxIDError):
    default_message = "entity type must be non-empty"


class InvalidUniqueIDLenError(BloxIDError):
    default_message = "unique ID did not meet minimum length requirements"


class IDEmptyError(BloxIDError):
    default_message = "empty bloxid"


class V0PartsError(BloxIDError):
    default_message = "invalid number of parts found"


@dataclass(frozen=True)
class V0:
    """A version 0 typed guid."""

    version: Version
    entity_domain: str
    entity_type: str
    realm: str
    encoded: str
    decoded: str
    scheme: str
    int64_id: int = 0

    def __str__(self) -> str:
        return V0_DELIMITER.join(
            (str(self.version), self.entity_domain, self.entity_type, self.realm, self.encoded)
        )

    @property
    def hash_id_int64(self) -> int:
        """The integer behind a hashid scheme id, or -1 for other schemes."""
        if self.scheme != ID_SCHEME_HASHID:
            return -1
        return self.int64_id


def new_v0(
    bloxid: str,
    *,
    entity_domain: str = "",
    entity_type: str = "",
    realm: str = "",
    salt: str = "",
    schemer: Schemer | None = None,
) -> V0:
    """Parse ``bloxid``, or generate a new id when it is blank."""
    if not bloxid.strip():
        return generate_v0(entity_domain, entity_type, realm, salt, schemer)
    return parse_v0(bloxid, salt)


def validate_v0(bloxid: str) -> None:
    """Raise a BloxIDError if ``bloxid`` is not a well-formed version 0 id."""
    parts = bloxid.split(V0_DELIMITER)
    if len(parts) != 5:
        raise V0PartsError()
    version, entity_domain, entity_type, _realm, encoded = parts
    if version != str(Version.V0):
        raise InvalidVersionError()
    if not entity_domain:
        raise InvalidEntityDomainError()
    if not entity_type:
        raise InvalidEntityTypeError()
    if len(encoded) < UNIQUE_ID_ENCODED_MIN_CHAR_SIZE:
        raise InvalidUniqueIDLenError()


def _trimmed_suffix(raw: bytes) -> str:
    return raw[_BLOXID_TYPE_LEN:].decode("utf-8", errors="replace").strip()


def parse_v0(bloxid: str, salt: str = "") -> V0:
    """Parse a serialized version 0 id; ``salt`` is needed for hashid ids."""
    if not bloxid:
        raise IDEmptyError()
    validate_v0(bloxid)

    version, entity_domain, entity_type, realm, encoded = bloxid.split(V0_DELIMITER)
    try:
        raw = base64.b32decode(encoded.upper())
    except (binascii.Error, ValueError) as exc:
        raise BloxIDError(f"unable to decode id: {exc}") from None

    int64_id = 0
    if raw.startswith(_HASH_ID_PREFIX_BYTES):
        int64_id = get_int64_from_hash_id(_trimmed_suffix(raw), salt)
        decoded = str(int64_id)
        scheme = ID_SCHEME_HASHID
    elif raw.startswith(_EXTRINSIC_ID_PREFIX_BYTES):
        decoded = _trimmed_suffix(raw)
        scheme = ID_SCHEME_EXTRINSIC
    else:
        if len(encoded) < DEFAULT_UNIQUE_ID_ENCODED_CHAR_SIZE:
            raise InvalidUniqueIDLenError()
        decoded = raw.hex()
        scheme = ID_SCHEME_RANDOM

    return V0(
        version=Version.from_name(version),
        entity_domain=entity_domain,
        entity_type=entity_type,
        realm=realm,
        encoded=encoded,
        decoded=decoded,
        scheme=scheme,
        int64_id=int64_id,
    )


def generate_v0(
    entity_domain: str = "",
    entity_type: str = "",
    realm: str = "",
    salt: str = "",
    schemer: Schemer | None = None,
) -> V0:
    """Generate a new version 0 id; without a schemer the unique id is random."""
    int64_id = 0
    if schemer is None:
        random_bytes = rand_default()
        decoded = random_bytes.hex()
        encoded = base64.b32encode(random_bytes).decode("ascii").lower()
        scheme = ID_SCHEME_RANDOM
    else:
        result = schemer.from_entity_id(salt)
        decoded, encoded, scheme = result.decoded, result.encoded, result.scheme
        if isinstance(schemer, HashIDInt64):
            int64_id = schemer.value

    return V0(
        version=Version.V0,
        entity_domain=entity_domain,
        entity_type=entity_type,
        realm=realm,
        encoded=encoded,
        decoded=decoded,
        scheme=scheme,
        int64_id=int64_id,
    )