"""Requests & Responses — control-message envelopes correlated by CID.

Invariants:
    - request(cid, body): subject tag(REQUEST, cid), exactly one `body` assertion
    - response(cid, result=OK): subject tag(RESPONSE, cid), one `result` assertion
      (result=None yields none)
    - response_with_results(cid, results): one `result` per element in list order;
      [] yields zero result assertions
    - error_response(cid, error): exactly one `error` assertion
    - unknown_response(error=None): subject tag(RESPONSE, "unknown"); one `error`
      assertion when error is given, none otherwise
    - body, error and every element of results are required: None raises ValueError;
      only response(result=None) and unknown_response(error=None) omit the assertion
    - Every builder returns a new immutable envelope

Design Decisions:
    - One function per message shape instead of overloading: the shape is explicit at
      the call site
    - The unknown response answers requests that could not be correlated at all, e.g.
      an encrypted request whose decryption failed
"""

from typing import Any

from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.cid import CID
from envex.core.envelope import Envelope
from envex.core.errors import InvalidFormatError, InvalidTagError
from envex.core.extraction import extract_one
from envex.core.known_values import BODY, ERROR, OK, RESULT

UNKNOWN_ID = "unknown"


def _subject(tag: int, cid: CID | str) -> CBORTag:
    inner = cid if isinstance(cid, str) else cid.to_cbor()
    return CBORTag(tag, inner)


def _required(value: Any, what: str) -> Any:
    if value is None:
        raise ValueError(f"{what} cannot be None")
    return value


# ─── Construction ────────────────────────────────────────────────

def request(cid: CID, body: Any) -> Envelope:
    return Envelope(_subject(cbor_tags.REQUEST, cid)).add_assertion(
        BODY, _required(body, "Request body"),
    )


def response(cid: CID, result: Any = OK) -> Envelope:
    return Envelope(_subject(cbor_tags.RESPONSE, cid)).add_assertion(RESULT, result)


def response_with_results(cid: CID, results: list) -> Envelope:
    envelope = Envelope(_subject(cbor_tags.RESPONSE, cid))
    for item in results:
        envelope = envelope.add_assertion(RESULT, _required(item, "Response result"))
    return envelope


def error_response(cid: CID, error: Any) -> Envelope:
    return Envelope(_subject(cbor_tags.RESPONSE, cid)).add_assertion(
        ERROR, _required(error, "Error response error"),
    )


def unknown_response(error: Any = None) -> Envelope:
    """Response to a request whose id could not be determined."""
    return Envelope(_subject(cbor_tags.RESPONSE, UNKNOWN_ID)).add_assertion(ERROR, error)


# ─── Introspection ───────────────────────────────────────────────

def _tagged_subject(envelope: Envelope, tag: int) -> Any:
    subject = envelope.subject
    if not isinstance(subject, CBORTag):
        raise InvalidTagError(tag, None)
    if subject.tag != tag:
        raise InvalidTagError(tag, subject.tag)
    return subject.value


def request_id(envelope: Envelope) -> CID:
    return CID.from_cbor(_tagged_subject(envelope, cbor_tags.REQUEST))


def request_body(envelope: Envelope) -> Envelope:
    _tagged_subject(envelope, cbor_tags.REQUEST)
    return extract_one(envelope, BODY, Envelope)


def is_response_id_unknown(envelope: Envelope) -> bool:
    return _tagged_subject(envelope, cbor_tags.RESPONSE) == UNKNOWN_ID


def response_id(envelope: Envelope) -> CID:
    """Correlation id of a response; an unknown response has none."""
    inner = _tagged_subject(envelope, cbor_tags.RESPONSE)
    if inner == UNKNOWN_ID:
        raise InvalidFormatError("Response id is unknown")
    return CID.from_cbor(inner)


def is_error(envelope: Envelope) -> bool:
    return bool(envelope.assertions_with_predicate(ERROR))
