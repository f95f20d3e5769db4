"""Known Values — namespace of unsigned integers used as predicates and sentinels.

Invariants:
    - Equality and hash by code only; the assigned name is for display
    - Wire form is tag(KNOWN_VALUE, uint); decode rehydrates names via a registry
    - BODY, RESULT and ERROR are the message predicates; OK is the no-data success result

Design Decisions:
    - Registered in a KnownRegistry like identifiers: one rehydration mechanism for all
      numeric namespaces
"""

from typing import Any

from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.cbor_values import is_unsigned
from envex.core.errors import InvalidFormatError, InvalidTagError
from envex.core.known_registry import KnownRegistry


class KnownValue:
    """A value in the known-value namespace: an unsigned code plus an optional name."""

    __slots__ = ("_code", "_assigned_name")

    def __init__(self, code: int, name: str | None = None):
        if not is_unsigned(code):
            raise ValueError(f"Known value must be an unsigned integer, got {code!r}")
        self._code = code
        self._assigned_name = name

    is_known = True

    @property
    def code(self) -> int:
        return self._code

    @property
    def assigned_name(self) -> str | None:
        return self._assigned_name

    @property
    def name(self) -> str:
        return self._assigned_name if self._assigned_name is not None else str(self._code)

    def to_cbor(self) -> CBORTag:
        return CBORTag(cbor_tags.KNOWN_VALUE, self._code)

    @classmethod
    def from_cbor(cls, value: Any, registry: "KnownRegistry[KnownValue] | None" = None):
        if not isinstance(value, CBORTag):
            raise InvalidTagError(cbor_tags.KNOWN_VALUE, None)
        if value.tag != cbor_tags.KNOWN_VALUE:
            raise InvalidTagError(cbor_tags.KNOWN_VALUE, value.tag)
        if not is_unsigned(value.value):
            raise InvalidFormatError(
                f"Known value content must be an unsigned integer, "
                f"found {type(value.value).__name__}",
            )
        if registry is None:
            registry = GLOBAL_KNOWN_VALUES
        return registry.canonical_or_bare(value.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KnownValue):
            return NotImplemented
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(("known_value", self._code))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self._assigned_name is None:
            return f"KnownValue({self._code})"
        return f"KnownValue({self._code}, {self._assigned_name!r})"


# ─── General ─────────────────────────────────────────────────────

UNKNOWN = KnownValue(17, "unknown")

# ─── Expressions and function calling ────────────────────────────

BODY = KnownValue(100, "body")              # predicate: object is the request body
RESULT = KnownValue(101, "result")          # predicate: object is a success result
ERROR = KnownValue(102, "error")            # predicate: object is the failure result
OK = KnownValue(103, "OK")                  # result of a request with no return value
PROCESSING = KnownValue(104, "processing")  # "in processing" result

WELL_KNOWN_VALUES: tuple[KnownValue, ...] = (
    UNKNOWN, BODY, RESULT, ERROR, OK, PROCESSING,
)

GLOBAL_KNOWN_VALUES: KnownRegistry[KnownValue] = KnownRegistry(
    KnownValue, WELL_KNOWN_VALUES,
)
