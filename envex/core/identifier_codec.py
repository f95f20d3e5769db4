"""Identifier Codec — tagged CBOR encoding for function and parameter identifiers.

Invariants:
    - Known{code, _} encodes as tag(role, uint(code)); the display name never goes on the wire
    - Named{value} encodes as tag(role, text(value))
    - Decode checks the outer tag first (InvalidTagError), then the inner shape (InvalidFormatError)
    - A decoded uint is rehydrated through the role's Known-Registry: registered codes come
      back with their canonical display name, unregistered codes come back bare

Design Decisions:
    - Role passed as the identifier class (kind): one codec serves every role
    - registry=None selects the role's process-wide registry; callers wanting deterministic
      output pass an explicit registry (or a snapshot) instead
"""

from typing import Any, TYPE_CHECKING

from cbor2 import CBORTag

from envex.core.cbor_values import is_unsigned
from envex.core.errors import InvalidFormatError, InvalidTagError

if TYPE_CHECKING:
    from envex.core.identifier import Identifier
    from envex.core.known_registry import KnownRegistry


def encode_identifier(identifier: "Identifier") -> CBORTag:
    """Encode an identifier under its role tag."""
    if identifier.is_known:
        return CBORTag(identifier.CBOR_TAG, identifier.code)
    return CBORTag(identifier.CBOR_TAG, identifier.value)


def decode_identifier(
    value: Any, kind: type, registry: "KnownRegistry | None" = None,
) -> "Identifier":
    """Decode a tagged CBOR value into an identifier of role `kind`."""
    if not isinstance(value, CBORTag):
        raise InvalidTagError(kind.CBOR_TAG, None)
    if value.tag != kind.CBOR_TAG:
        raise InvalidTagError(kind.CBOR_TAG, value.tag)
    return decode_untagged(value.value, kind, registry)


def decode_untagged(
    inner: Any, kind: type, registry: "KnownRegistry | None" = None,
) -> "Identifier":
    """Decode the content found under a role tag."""
    if is_unsigned(inner):
        if registry is None:
            registry = kind.default_registry()
        return registry.canonical_or_bare(inner)
    if isinstance(inner, str):
        return kind.named(inner)
    raise InvalidFormatError(
        f"{kind.__name__} content must be an unsigned integer or text, "
        f"found {type(inner).__name__}",
    )
