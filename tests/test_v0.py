import pytest

from atlaskit.bloxid.hashids import BloxIDError, HashidsError, InvalidIDError
from atlaskit.bloxid.schemes import (
    EmptyExtrinsicIDError,
    EmptyRandomEncodedIDError,
    ExtrinsicID,
    HashIDInt64,
    InvalidSizeRandomEncodedIDError,
    RandomEncodedID,
)
from atlaskit.bloxid.v0 import (
    V0,
    IDEmptyError,
    InvalidEntityDomainError,
    InvalidEntityTypeError,
    InvalidUniqueIDLenError,
    InvalidVersionError,
    V0PartsError,
    Version,
    generate_v0,
    new_v0,
    parse_v0,
    validate_v0,
)


@pytest.mark.parametrize(
    "bloxid, error",
    [
        ("bloxv0....", InvalidVersionError),
        ("blox0....", InvalidEntityDomainError),
        ("blox0.infra...", InvalidEntityTypeError),
        ("blox0.infra.host..", InvalidUniqueIDLenError),
    ],
)
def test_new_v0_rejects_invalid(bloxid, error):
    with pytest.raises(error):
        new_v0(bloxid)


def test_new_v0_parses_random_id():
    bloxid = "blox0.infra.host..zdud52youveke5sovyoc66cjxw3l55jc"
    v0 = new_v0(bloxid)
    assert str(v0) == bloxid
    assert v0.entity_domain == "infra"
    assert v0.entity_type == "host"
    assert v0.decoded == "c8e83eeb0ea548a2764eae1c2f7849bdb6bef522"
    assert v0.scheme == "random"
    assert v0.hash_id_int64 == -1


def test_validate_v0_wrong_part_count():
    with pytest.raises(V0PartsError):
        validate_v0("blox0.infra.host")


def test_parse_v0_empty():
    with pytest.raises(IDEmptyError):
        parse_v0("")


def test_parse_v0_bad_base32():
    with pytest.raises(BloxIDError, match="^unable to decode id"):
        parse_v0("blox0.infra.host..abcdefghijklmno1")


def test_parse_v0_short_random_id():
    with pytest.raises(InvalidUniqueIDLenError):
        parse_v0("blox0.infra.host..aaaaaaaaaaaaaaaa")


def test_version_names():
    assert str(Version.V0) == "blox0"
    assert Version.from_name("nope") is Version.UNKNOWN


EXTRINSIC_CASES = [
    ("1", "blox0.infra.host.us-com-1.ivmfiurreaqcaiba"),
    ("12", "blox0.infra.host.us-com-1.ivmfiurrgiqcaiba"),
    ("123", "blox0.infra.host.us-com-1.ivmfiurrgizsaiba"),
    ("1234", "blox0.infra.host.us-com-1.ivmfiurrgiztiiba"),
    ("12345", "blox0.infra.host.us-com-1.ivmfiurrgiztinja"),
    ("123456", "blox0.infra.host.us-com-1.ivmfiurrgiztinjweaqcaiba"),
    ("1234567", "blox0.infra.host.us-com-1.ivmfiurrgiztinjwg4qcaiba"),
    ("12345678", "blox0.infra.host.us-com-1.ivmfiurrgiztinjwg44caiba"),
    ("123456789", "blox0.infra.host.us-com-1.ivmfiurrgiztinjwg44dsiba"),
]


def _check_common(v0, realm, domain, entity_type):
    assert "=" not in str(v0)
    assert v0.realm == realm
    assert v0.entity_domain == domain
    assert v0.entity_type == entity_type


@pytest.mark.parametrize("extrinsic_id, expected", EXTRINSIC_CASES)
def test_generate_with_extrinsic_id(extrinsic_id, expected):
    v0 = new_v0(
        "",
        entity_domain="infra",
        entity_type="host",
        realm="us-com-1",
        schemer=ExtrinsicID(extrinsic_id),
    )
    assert str(v0) == expected
    assert v0.decoded == extrinsic_id
    _check_common(v0, "us-com-1", "infra", "host")

    parsed = new_v0(str(v0))
    assert str(parsed) == expected
    assert parsed.decoded == extrinsic_id
    assert parsed.scheme == "extrinsic"
    _check_common(parsed, "us-com-1", "infra", "host")


@pytest.mark.parametrize("realm", ["us-com-1", "us-com-2"])
def test_generate_with_empty_extrinsic_id(realm):
    with pytest.raises(EmptyExtrinsicIDError):
        new_v0(
            "",
            entity_domain="infra",
            entity_type="host",
            realm=realm,
            schemer=ExtrinsicID(""),
        )


@pytest.mark.parametrize(
    "encoded_id, error",
    [
        ("", EmptyRandomEncodedIDError),
        ("foo", InvalidSizeRandomEncodedIDError),
    ],
)
def test_generate_with_bad_random_encoded_id(encoded_id, error):
    with pytest.raises(error):
        new_v0(
            "",
            entity_domain="iam",
            entity_type="group",
            realm="us-com-2",
            schemer=RandomEncodedID(encoded_id),
        )


@pytest.mark.parametrize(
    "encoded_id",
    ["tshwyq3mfkgqqcfa76a5hbr2uaayzw3h", "dyf5zexvwheul2bqqcibpmvfvvbh5ybp"],
)
def test_generate_with_random_encoded_id(encoded_id):
    expected = f"blox0.iam.group.us-com-1.{encoded_id}"
    v0 = new_v0(
        "",
        entity_domain="iam",
        entity_type="group",
        realm="us-com-1",
        schemer=RandomEncodedID(encoded_id),
    )
    assert v0.encoded == encoded_id
    assert str(v0) == expected
    _check_common(v0, "us-com-1", "iam", "group")

    parsed = new_v0(str(v0))
    assert parsed.encoded == encoded_id
    assert str(parsed) == expected
    assert parsed == v0


def test_generate_random_entity_id():
    v0 = new_v0("", entity_domain="iam", entity_type="group", realm="us-com-1")
    assert len(v0.encoded) == 32
    assert len(v0.decoded) == 40
    assert v0.scheme == "random"
    _check_common(v0, "us-com-1", "iam", "group")

    parsed = new_v0(str(v0))
    assert len(parsed.encoded) == 32
    assert parsed == v0


def test_blank_bloxid_generates():
    v0 = new_v0("   ", entity_domain="iam", entity_type="group")
    assert str(v0).startswith("blox0.iam.group..")


def test_generated_random_ids_differ():
    encoded = [generate_v0("iam", "group").encoded for _ in range(8)]
    assert all(len(value) == 32 for value in encoded)
    assert len(set(encoded)) == 8


HASHID_BLOXID = (
    "blox0.infra.host.us-com-1."
    "jbeuiwrsmq3tkmzwmuzwcojsmrqwemrtgy3tqzbvhbsdizjvhe2dkn3cgzrdizlb"
)


def test_hash_id_to_int_valid():
    v0 = new_v0(HASHID_BLOXID, salt="test")
    assert v0.hash_id_int64 == 1
    assert v0.decoded == "1"
    assert v0.scheme == "hashid"


def test_hash_id_to_int_different_salt():
    with pytest.raises(HashidsError) as exc_info:
        new_v0(HASHID_BLOXID, salt="testi1")
    assert str(exc_info.value) == (
        "mismatch between encode and decode: 2d7536e3a92dab23678d58d4e59457b6b4ea "
        "start ed4b2a9764524ed6958d58237ba3eadb7695 re-encoded. result: [4]"
    )


def test_hash_id_invalid_prefix_is_random_scheme():
    v0 = new_v0(
        "blox0.infra.host.us-com-1."
        "jbeuiqjsmq3tkmzwmuzwcojsmrqwemrtgy3tqzbvhbsdizjvhe2dkn3cgzrdizlb",
        salt="test",
    )
    assert v0.hash_id_int64 == -1
    assert v0.scheme == "random"


def test_hash_id_int_round_trip():
    v0 = new_v0(
        "",
        entity_domain="infra",
        entity_type="hostapp",
        realm="us-com-1",
        schemer=HashIDInt64(1),
        salt="test",
    )
    parsed = new_v0(str(v0), salt="test")
    assert parsed.hash_id_int64 == 1
    assert int(parsed.decoded) == 1
    assert parsed == v0


def test_hash_id_int_negative():
    with pytest.raises(InvalidIDError):
        new_v0(
            "",
            entity_domain="infra",
            entity_type="hostapp",
            realm="us-com-1",
            schemer=HashIDInt64(-1),
            salt="test",
        )


@pytest.mark.parametrize(
    "value",
    [1, 12, 123, 1234, 12345, 123456, 1234567, 12345678, 123456789],
)
def test_generate_hash_id_has_no_padding(value):
    v0 = new_v0(
        "",
        entity_domain="infra",
        entity_type="host",
        realm="us-com-1",
        schemer=HashIDInt64(value),
        salt="test",
    )
    assert "=" not in str(v0)
    assert new_v0(str(v0), salt="test").hash_id_int64 == value


def test_v0_equality_is_by_value():
    a = V0(Version.V0, "d", "t", "r", "e", "x", "extrinsic")
    b = V0(Version.V0, "d", "t", "r", "e", "x", "extrinsic")
    assert a == b
    assert str(a) == "blox0.d.t.r.e"