"""Known Values & CID — collaborator value types used by messages.

Tests cover:
    - KnownValue equality by code, tagged encoding, registry rehydration on decode
    - KnownValue decode failures (tag, shape)
    - CID length validation, hex helpers, tagged encoding and decode failures
"""

import pytest
from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.cid import CID
from envex.core.errors import InvalidFormatError, InvalidTagError
from envex.core.known_registry import KnownRegistry
from envex.core.known_values import BODY, OK, RESULT, KnownValue

HEX = "be74063a9e65855271432f5a4c1e877dea75aff0beaad47dc24260d93b4ea27b"


# ─── KnownValue ──────────────────────────────────────────────────

def test_known_value_equality_ignores_name():
    assert KnownValue(103) == OK
    assert KnownValue(103, "okay") == OK
    assert BODY != RESULT


def test_known_value_encodes_under_known_value_tag():
    assert OK.to_cbor() == CBORTag(cbor_tags.KNOWN_VALUE, 103)


def test_known_value_decode_rehydrates_name():
    decoded = KnownValue.from_cbor(CBORTag(cbor_tags.KNOWN_VALUE, 100))
    assert decoded.name == "body"


def test_known_value_decode_with_explicit_registry():
    decoded = KnownValue.from_cbor(
        CBORTag(cbor_tags.KNOWN_VALUE, 100), KnownRegistry(KnownValue),
    )
    assert decoded.name == "100"


def test_known_value_decode_failures():
    with pytest.raises(InvalidTagError):
        KnownValue.from_cbor(CBORTag(cbor_tags.FUNCTION, 100))
    with pytest.raises(InvalidTagError):
        KnownValue.from_cbor(100)
    with pytest.raises(InvalidFormatError):
        KnownValue.from_cbor(CBORTag(cbor_tags.KNOWN_VALUE, "body"))


def test_known_value_rejects_negative_code():
    with pytest.raises(ValueError):
        KnownValue(-1)


# ─── CID ─────────────────────────────────────────────────────────

def test_cid_from_hex_and_short_description():
    cid = CID.from_hex(HEX)
    assert cid.hex == HEX
    assert cid.short_description == "be74063a"
    assert str(cid) == "CID(be74063a)"


def test_cid_new_is_random_32_bytes():
    a, b = CID.new(), CID.new()
    assert len(a.data) == 32
    assert a != b


def test_cid_rejects_wrong_length():
    with pytest.raises(InvalidFormatError):
        CID(b"\x00" * 16)
    with pytest.raises(InvalidFormatError):
        CID.from_hex("zz")


def test_cid_tagged_round_trip():
    cid = CID.from_hex(HEX)
    assert cid.to_cbor() == CBORTag(cbor_tags.CID, cid.data)
    assert CID.from_cbor(cid.to_cbor()) == cid


def test_cid_decode_failures():
    with pytest.raises(InvalidTagError):
        CID.from_cbor(CBORTag(cbor_tags.REQUEST, b"\x00" * 32))
    with pytest.raises(InvalidFormatError):
        CID.from_cbor(CBORTag(cbor_tags.CID, "not bytes"))
