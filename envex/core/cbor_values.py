"""CBOR Values — normalisation of domain values to plain CBOR and typed decoding back.

Invariants:
    - as_cbor() output contains only cbor2-native values (int, str, bytes, float, bool,
      None, list, dict, CBORTag); domain objects contribute through their to_cbor()
    - canonical_bytes() is deterministic: equal values yield equal bytes (digest analogue)
    - decode_as() never coerces across kinds: bool is not int, int is not str
    - Every decode failure surfaces as TypeMismatchError

Design Decisions:
    - Duck-typed to_cbor()/from_cbor() over a type registry: identifiers, known values and
      CIDs plug in without this module importing them (ADR: dependency arrows point inward)
"""

from typing import Any

import cbor2
from cbor2 import CBORTag

from envex.core.errors import EnvexError, InvalidFormatError, TypeMismatchError


def as_cbor(value: Any) -> Any:
    """Convert a domain value into its plain CBOR form."""
    to_cbor = getattr(value, "to_cbor", None)
    if callable(to_cbor):
        return to_cbor()
    if isinstance(value, CBORTag):
        return CBORTag(value.tag, as_cbor(value.value))
    if isinstance(value, (list, tuple)):
        return [as_cbor(v) for v in value]
    if isinstance(value, dict):
        return {as_cbor(k): as_cbor(v) for k, v in value.items()}
    return value


def canonical_bytes(value: Any) -> bytes:
    """Deterministic CBOR encoding of a domain value."""
    return cbor2.dumps(as_cbor(value), canonical=True)


def loads(data: bytes) -> Any:
    """Decode CBOR bytes, mapping malformed input to InvalidFormatError."""
    try:
        return cbor2.loads(data)
    except cbor2.CBORDecodeError as e:
        raise InvalidFormatError(f"Malformed CBOR: {e}") from e


MAX_UNSIGNED = 2**64 - 1


def is_unsigned(value: Any) -> bool:
    """True for CBOR major-type-0 integers: 0..2**64-1, bool excluded."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_UNSIGNED


def decode_as(value: Any, target: type) -> Any:
    """Decode a value (domain or plain CBOR form) into `target`.

    Supported targets are the CBOR scalars (int, str, bytes, float, bool) and any
    class exposing a `from_cbor` classmethod. Raises TypeMismatchError otherwise.
    """
    cbor = as_cbor(value)
    found = type(cbor).__name__
    if target is bool:
        if isinstance(cbor, bool):
            return cbor
    elif target is int:
        if isinstance(cbor, int) and not isinstance(cbor, bool):
            return cbor
    elif target is float:
        if isinstance(cbor, (int, float)) and not isinstance(cbor, bool):
            return float(cbor)
    elif target in (str, bytes):
        if isinstance(cbor, target):
            return cbor
    else:
        from_cbor = getattr(target, "from_cbor", None)
        if not callable(from_cbor):
            raise TypeError(f"{target!r} is not a decodable target type")
        try:
            return from_cbor(cbor)
        except EnvexError as e:
            raise TypeMismatchError(target.__name__, e.message) from e
    raise TypeMismatchError(target.__name__, f"found {found}")
