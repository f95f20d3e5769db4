"""Message Codec — whole request/response envelopes to and from wire bytes.

Invariants:
    - decode_message() rejects input larger than settings.max_message_bytes before parsing
    - Malformed CBOR surfaces as InvalidFormatError, never as a cbor2 exception
    - Every decode failure is logged once (WARNING, with error_code) and re-raised unchanged
    - parse_request() returns the correlation id and the body; parse_response() checks the
      response tag and leaves result/error extraction to the caller

Design Decisions:
    - Logging lives here, not in core/: the core stays pure and the shell owns observability
    - No retries: a message that fails to decode is the caller's to reject or answer with
      an unknown response
"""

import logging

from envex.config import Settings, get_settings
from envex.core.cid import CID
from envex.core.envelope import Envelope
from envex.core.errors import EnvexError, MessageTooLargeError
from envex.core.messages import is_response_id_unknown, request_body, request_id

logger = logging.getLogger(__name__)


def encode_message(envelope: Envelope) -> bytes:
    return envelope.to_bytes()


def decode_message(data: bytes, settings: Settings | None = None) -> Envelope:
    """Decode wire bytes into an envelope, enforcing the size limit."""
    settings = settings or get_settings()
    try:
        if len(data) > settings.max_message_bytes:
            raise MessageTooLargeError(len(data), settings.max_message_bytes)
        return Envelope.from_bytes(data)
    except EnvexError as e:
        _log_failure("message", e, len(data))
        raise


def parse_request(data: bytes, settings: Settings | None = None) -> tuple[CID, Envelope]:
    """Decode a request and return (id, body)."""
    envelope = decode_message(data, settings)
    try:
        return request_id(envelope), request_body(envelope)
    except EnvexError as e:
        _log_failure("request", e, len(data))
        raise


def parse_response(data: bytes, settings: Settings | None = None) -> Envelope:
    """Decode a response envelope (with a known or unknown id)."""
    envelope = decode_message(data, settings)
    try:
        is_response_id_unknown(envelope)
    except EnvexError as e:
        _log_failure("response", e, len(data))
        raise
    return envelope


def _log_failure(kind: str, error: EnvexError, size: int) -> None:
    logger.warning(
        "Failed to decode %s: %s", kind, error.message,
        extra={"error_code": error.code, "tag": error.context.tag, "size": size},
    )
