import pytest

from atlaskit.bloxid.hashids import (
    HASH_ID_ALLOWED_CHARS,
    MAX_HASH_ID_LEN,
    BloxIDError,
    Hashids,
    HashidsError,
    InvalidIDError,
    InvalidSaltError,
    get_hash_id,
    get_int64_from_hash_id,
)

HASH_OF_ONE = "2d7536e3a92dab23678d58d4e59457b6b4ea"
HASH_OF_ZERO = "e735d27d4a5e57d3648658a92be26b93b46a"


@pytest.mark.parametrize(
    "value, salt, expected",
    [(1, "test", HASH_OF_ONE), (0, "test", HASH_OF_ZERO)],
)
def test_get_hash_id(value, salt, expected):
    assert get_hash_id(value, salt) == expected


def test_get_hash_id_negative():
    with pytest.raises(InvalidIDError):
        get_hash_id(-1, "test1")


def test_get_hash_id_too_large():
    with pytest.raises(InvalidIDError):
        get_hash_id(2**63, "test")


def test_get_hash_id_empty_salt_checked_first():
    with pytest.raises(InvalidSaltError):
        get_hash_id(-1, "")


@pytest.mark.parametrize(
    "hashid, salt, expected",
    [(HASH_OF_ONE, "test", 1), (HASH_OF_ZERO, "test", 0)],
)
def test_get_int64_from_hash_id(hashid, salt, expected):
    assert get_int64_from_hash_id(hashid, salt) == expected


def test_get_int64_from_empty_hash():
    with pytest.raises(InvalidIDError):
        get_int64_from_hash_id("", "test1")


def test_get_int64_from_hash_id_empty_salt():
    with pytest.raises(InvalidSaltError):
        get_int64_from_hash_id(HASH_OF_ONE, "")


def test_get_int64_from_hash_id_different_salt():
    with pytest.raises(HashidsError) as info:
        get_int64_from_hash_id(HASH_OF_ONE, "testi1")
    assert str(info.value) == (
        "mismatch between encode and decode: 2d7536e3a92dab23678d58d4e59457b6b4ea"
        " start ed4b2a9764524ed6958d58237ba3eadb7695 re-encoded. result: [4]"
    )


def test_errors_share_base_class():
    with pytest.raises(BloxIDError):
        get_hash_id(5, "")


@pytest.mark.parametrize("value", [0, 1, 12, 123456789, 2**63 - 1])
def test_hash_id_round_trip(value):
    hashed = get_hash_id(value, "test")
    assert len(hashed) == MAX_HASH_ID_LEN
    assert set(hashed) <= set(HASH_ID_ALLOWED_CHARS)
    assert get_int64_from_hash_id(hashed, "test") == value


@pytest.mark.parametrize(
    "numbers",
    [(0,), (1, 2, 3), (987654321, 0, 42), (5, 5, 5, 5)],
)
def test_hashids_round_trip_default_alphabet(numbers):
    codec = Hashids(salt="pepper", min_length=10)
    hashed = codec.encode(*numbers)
    assert len(hashed) >= 10
    assert codec.decode(hashed) == numbers


def test_hashids_without_min_length_round_trip():
    codec = Hashids(salt="pepper")
    hashed = codec.encode(1)
    assert codec.decode(hashed) == (1,)


def test_hashids_different_salts_give_different_hashes():
    assert Hashids(salt="a").encode(100) != Hashids(salt="b").encode(100)


def test_hashids_encode_empty():
    with pytest.raises(HashidsError):
        Hashids(salt="x").encode()


def test_hashids_encode_negative():
    with pytest.raises(HashidsError):
        Hashids(salt="x").encode(1, -2)


def test_hashids_decode_foreign_character():
    codec = Hashids(salt="test", min_length=MAX_HASH_ID_LEN, alphabet=HASH_ID_ALLOWED_CHARS)
    with pytest.raises(HashidsError):
        codec.decode("z" * MAX_HASH_ID_LEN)


@pytest.mark.parametrize(
    "alphabet",
    ["abcdef", "abcdefghijklmnop qrs", "aabcdefghijklmnopq"],
)
def test_hashids_invalid_alphabet(alphabet):
    with pytest.raises(HashidsError):
        Hashids(salt="x", alphabet=alphabet)