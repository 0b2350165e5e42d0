"""Hashids encoding used by the ``hashid`` bloxid scheme."""

from __future__ import annotations

import math
from collections.abc import Sequence

ID_SCHEME_HASHID = "hashid"

HASH_ID_ALLOWED_CHARS = "0123456789abcdef"

# Upper case so it cannot collide with any character of HASH_ID_ALLOWED_CHARS.
HASH_ID_PREFIX = "HIDZ"

UNIQUE_ID_DECODED_CHAR_SIZE = 40

MAX_HASH_ID_LEN = UNIQUE_ID_DECODED_CHAR_SIZE - len(HASH_ID_PREFIX)

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"

INT64_MAX = 2**63 - 1

_SEPARATORS = "cfhistuCFHISTU"
_MIN_ALPHABET_LENGTH = 16
_SEP_DIV = 3.5
_GUARD_DIV = 12.0


class BloxIDError(ValueError):
    """Base class for every bloxid error."""

    default_message = "bloxid error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class InvalidSaltError(BloxIDError):
    """The hashid salt is empty."""

    default_message = "invalid salt"


class InvalidIDError(BloxIDError):
    """The id cannot be turned into or out of a hashid."""

    default_message = "invalid id"


class HashidsError(BloxIDError):
    """Hashids configuration, encoding or decoding failed."""

    default_message = "hashids error"


def _consistent_shuffle(alphabet: list[str], salt: Sequence[str]) -> None:
    """Shuffle ``alphabet`` in place, deterministically for a given salt."""
    if not salt:
        return
    v = 0
    p = 0
    for i in range(len(alphabet) - 1, 0, -1):
        code = ord(salt[v])
        p += code
        j = (code + v + p) % i
        alphabet[i], alphabet[j] = alphabet[j], alphabet[i]
        v = (v + 1) % len(salt)


def _hash(number: int, alphabet: Sequence[str]) -> list[str]:
    base = len(alphabet)
    digits = []
    while True:
        number, remainder = divmod(number, base)
        digits.append(alphabet[remainder])
        if number == 0:
            break
    digits.reverse()
    return digits


def _unhash(text: str, alphabet: list[str]) -> int:
    base = len(alphabet)
    result = 0
    for ch in text:
        try:
            position = alphabet.index(ch)
        except ValueError:
            raise HashidsError("alphabet used for hash was different") from None
        result = result * base + position
        if result > INT64_MAX:
            raise HashidsError("number can not be represented as int64")
    return result


def _split(text: str, separators: Sequence[str]) -> list[str]:
    parts: list[list[str]] = [[]]
    for ch in text:
        if ch in separators:
            parts.append([])
        else:
            parts[-1].append(ch)
    return ["".join(part) for part in parts]


class Hashids:
    """Encoder and decoder of non-negative integers into short hash strings."""

    def __init__(
        self,
        salt: str = "",
        min_length: int = 0,
        alphabet: str = DEFAULT_ALPHABET,
    ) -> None:
        if len(alphabet) < _MIN_ALPHABET_LENGTH:
            raise HashidsError(
                f"Alphabet must contain at least {_MIN_ALPHABET_LENGTH} characters"
            )
        if " " in alphabet:
            raise HashidsError("Alphabet may not contain spaces")
        seen: set[str] = set()
        for ch in alphabet:
            if ch in seen:
                raise HashidsError(f"duplicate character in alphabet: {ch}")
            seen.add(ch)

        salt_chars = list(salt)
        seps = [ch for ch in _SEPARATORS if ch in seen]
        chars = [ch for ch in alphabet if ch not in seps]
        _consistent_shuffle(seps, salt_chars)

        if not seps or len(chars) / len(seps) > _SEP_DIV:
            seps_length = math.ceil(len(chars) / _SEP_DIV)
            if seps_length == 1:
                seps_length += 1
            if seps_length > len(seps):
                diff = seps_length - len(seps)
                seps.extend(chars[:diff])
                chars = chars[diff:]
            else:
                seps = seps[:seps_length]

        _consistent_shuffle(chars, salt_chars)

        guard_count = math.ceil(len(chars) / _GUARD_DIV)
        if len(chars) < 3:
            guards = seps[:guard_count]
            seps = seps[guard_count:]
        else:
            guards = chars[:guard_count]
            chars = chars[guard_count:]

        self._alphabet = chars
        self._salt = salt_chars
        self._seps = seps
        self._guards = guards
        self._min_length = min_length

    def _lottery_shuffle(self, lottery: str, alphabet: list[str]) -> None:
        buffer = ([lottery] + self._salt + alphabet)[: len(alphabet)]
        _consistent_shuffle(alphabet, buffer)

    def encode(self, *args: int) -> str:
        """Encode one or more non-negative integers into a hash string."""
        if not args:
            raise HashidsError("encoding empty array of numbers makes no sense")
        if any(n < 0 for n in args):
            raise HashidsError("negative number not supported")

        alphabet = list(self._alphabet)
        numbers_hash = sum(n % (i + 100) for i, n in enumerate(args))
        lottery = alphabet[numbers_hash % len(alphabet)]
        result = [lottery]

        for i, number in enumerate(args):
            self._lottery_shuffle(lottery, alphabet)
            hashed = _hash(number, alphabet)
            result.extend(hashed)
            if i + 1 < len(args):
                number %= ord(hashed[0]) + i
                result.append(self._seps[number % len(self._seps)])

        if len(result) < self._min_length:
            guard_index = (numbers_hash + ord(result[0])) % len(self._guards)
            result.insert(0, self._guards[guard_index])
            if len(result) < self._min_length:
                guard_index = (numbers_hash + ord(result[2])) % len(self._guards)
                result.append(self._guards[guard_index])

        half = len(alphabet) // 2
        while len(result) < self._min_length:
            _consistent_shuffle(alphabet, list(alphabet))
            result = alphabet[half:] + result + alphabet[:half]
            excess = len(result) - self._min_length
            if excess > 0:
                start = excess // 2
                result = result[start : start + self._min_length]

        return "".join(result)

    def decode(self, hashid: str) -> tuple[int, ...]:
        """Decode a hash string; raise HashidsError unless it re-encodes identically."""
        parts = _split(hashid, self._guards)
        breakdown = parts[1] if len(parts) in (2, 3) else parts[0]

        numbers: list[int] = []
        if breakdown:
            lottery, rest = breakdown[0], breakdown[1:]
            alphabet = list(self._alphabet)
            for sub_hash in _split(rest, self._seps):
                self._lottery_shuffle(lottery, alphabet)
                numbers.append(_unhash(sub_hash, alphabet))

        try:
            check = self.encode(*numbers)
        except HashidsError:
            check = ""
        if check != hashid:
            listed = " ".join(str(n) for n in numbers)
            raise HashidsError(
                f"mismatch between encode and decode: {hashid} start {check}"
                f" re-encoded. result: [{listed}]"
            )
        return tuple(numbers)


def _new_hash_id(salt: str) -> Hashids:
    return Hashids(salt=salt, min_length=MAX_HASH_ID_LEN, alphabet=HASH_ID_ALLOWED_CHARS)


def get_hash_id(id_: int, salt: str) -> str:
    """Return the fixed-length hex hashid of a non-negative int64."""
    if not salt:
        raise InvalidSaltError()
    if id_ < 0 or id_ > INT64_MAX:
        raise InvalidIDError()
    return _new_hash_id(salt).encode(id_)


def get_int64_from_hash_id(hashid: str, salt: str) -> int:
    """Return the int64 encoded in a hashid produced by :func:`get_hash_id`."""
    if not salt:
        raise InvalidSaltError()
    if len(hashid) != MAX_HASH_ID_LEN:
        raise InvalidIDError()
    return _new_hash_id(salt).decode(hashid)[0]