"""Message Codec — wire bytes in and out, limits and failure logging.

Tests cover:
    - encode/decode round trip of requests and responses
    - parse_request returns (id, body); parse_response checks the response tag
    - Oversized input raises MessageTooLargeError before parsing
    - Malformed input raises InvalidFormatError and is logged with its error_code
"""

import logging

import pytest

from envex.config import Settings
from envex.core.cid import CID
from envex.core.errors import InvalidFormatError, InvalidTagError, MessageTooLargeError
from envex.core.expression import add_parameter, extract_argument, extract_function, function_envelope
from envex.core.extraction import extract_error, is_result_ok
from envex.core.functions import ADD
from envex.core.messages import request, response, unknown_response
from envex.core.parameters import LHS, RHS
from envex.services.message_codec import (
    decode_message,
    encode_message,
    parse_request,
    parse_response,
)


@pytest.fixture
def cid() -> CID:
    return CID.new()


def _body():
    return add_parameter(add_parameter(function_envelope(ADD), LHS, 2), RHS, 3)


def test_round_trip(cid):
    envelope = request(cid, _body())
    assert decode_message(encode_message(envelope)) == envelope


def test_parse_request(cid):
    request_cid, body = parse_request(encode_message(request(cid, _body())))
    assert request_cid == cid
    assert extract_function(body) == ADD
    assert extract_argument(body, RHS, int) == 3


def test_parse_request_rejects_response(cid, caplog):
    with caplog.at_level(logging.WARNING, logger="envex.services.message_codec"):
        with pytest.raises(InvalidTagError):
            parse_request(encode_message(response(cid)))
    assert caplog.records[-1].error_code == "INVALID_TAG"


def test_parse_response(cid):
    assert is_result_ok(parse_response(encode_message(response(cid))))
    unknown = parse_response(encode_message(unknown_response("Decryption Failed")))
    assert extract_error(unknown, str) == "Decryption Failed"


def test_parse_response_rejects_request(cid):
    with pytest.raises(InvalidTagError):
        parse_response(encode_message(request(cid, _body())))


def test_oversized_message_rejected(cid):
    data = encode_message(request(cid, _body()))
    with pytest.raises(MessageTooLargeError) as exc:
        decode_message(data, Settings(max_message_bytes=8))
    assert exc.value.size == len(data)


def test_malformed_message_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="envex.services.message_codec"):
        with pytest.raises(InvalidFormatError):
            decode_message(b"\x18")
    [record] = caplog.records
    assert record.error_code == "INVALID_FORMAT"
    assert record.size == 1
