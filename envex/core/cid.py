"""CID — opaque correlation id binding a response to its request.

Invariants:
    - Exactly 32 bytes of data
    - Wire form is tag(CID, bytes32)
"""

import secrets
from dataclasses import dataclass
from typing import Any

from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.errors import InvalidFormatError, InvalidTagError

CID_SIZE = 32


@dataclass(frozen=True)
class CID:
    """Correlation identifier: 32 random bytes."""
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes) or len(self.data) != CID_SIZE:
            raise InvalidFormatError(f"CID must be {CID_SIZE} bytes")

    @classmethod
    def new(cls) -> "CID":
        return cls(secrets.token_bytes(CID_SIZE))

    @classmethod
    def from_hex(cls, hex_string: str) -> "CID":
        try:
            data = bytes.fromhex(hex_string)
        except ValueError as e:
            raise InvalidFormatError(f"CID hex is malformed: {e}") from e
        return cls(data)

    @property
    def hex(self) -> str:
        return self.data.hex()

    @property
    def short_description(self) -> str:
        return self.data[:4].hex()

    def to_cbor(self) -> CBORTag:
        return CBORTag(cbor_tags.CID, self.data)

    @classmethod
    def from_cbor(cls, value: Any) -> "CID":
        if not isinstance(value, CBORTag):
            raise InvalidTagError(cbor_tags.CID, None)
        if value.tag != cbor_tags.CID:
            raise InvalidTagError(cbor_tags.CID, value.tag)
        if not isinstance(value.value, bytes):
            raise InvalidFormatError("CID content must be a byte string")
        return cls(value.value)

    def __str__(self) -> str:
        return f"CID({self.short_description})"
