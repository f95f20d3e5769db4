"""Envelope — minimal subject + assertions value consumed by the expression layer.

Invariants:
    - Immutable: add_assertion() returns a new envelope, the receiver is unchanged
    - add_assertion(predicate, None) returns the receiver itself (absent value, no assertion)
    - Assertions form a multiset: duplicates are kept, storage order is insertion order,
      and the wire form sorts assertions by canonical bytes — callers never rely on order
    - Predicate matching and equality compare canonical CBOR bytes (the digest analogue),
      so an in-memory Known(2, "lhs") matches a wire-decoded bare 2
    - Wire form: tag(ENVELOPE, [subject, [[predicate, object], ...]])
    - The canonical encoding (digest) is computed once per envelope and cached

Design Decisions:
    - Predicates and objects are themselves envelopes (wrap()): nested function calls and
      request bodies need no special casing
    - Wire-decoded subjects stay in plain CBOR form; typed access goes through
      extract_subject(), which decodes lazily with the caller's target type
"""

from dataclasses import dataclass
from typing import Any

from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.cbor_values import as_cbor, canonical_bytes, decode_as, loads
from envex.core.errors import InvalidFormatError, InvalidTagError


def _is_array(value: Any) -> bool:
    # cbor2 decodes arrays as list or, under a tag in 6.x, as tuple
    return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class Assertion:
    """A single predicate -> object pair attached to a subject."""
    predicate: "Envelope"
    object: "Envelope"

    def to_cbor(self) -> list:
        return [self.predicate.to_cbor(), self.object.to_cbor()]


class Envelope:
    """A subject with zero or more assertions."""

    __slots__ = ("_subject", "_assertions", "_digest")

    def __init__(self, subject: Any, assertions: tuple[Assertion, ...] = ()):
        if subject is None:
            raise ValueError("Envelope subject cannot be None")
        self._subject = subject
        self._assertions = tuple(assertions)
        self._digest: bytes | None = None

    @classmethod
    def wrap(cls, value: Any) -> "Envelope":
        """The value itself if already an envelope, else a leaf envelope around it."""
        if isinstance(value, Envelope):
            return value
        return cls(value)

    @property
    def subject(self) -> Any:
        return self._subject

    @property
    def assertions(self) -> tuple[Assertion, ...]:
        return self._assertions

    @property
    def is_leaf(self) -> bool:
        return not self._assertions

    # ─── Construction ───────────────────────────────────────────

    def add_assertion(self, predicate: Any, obj: Any) -> "Envelope":
        if obj is None:
            return self
        assertion = Assertion(Envelope.wrap(predicate), Envelope.wrap(obj))
        return Envelope(self._subject, self._assertions + (assertion,))

    def add_assertions(self, assertions: list[Assertion]) -> "Envelope":
        return Envelope(self._subject, self._assertions + tuple(assertions))

    # ─── Queries ────────────────────────────────────────────────

    def assertions_with_predicate(self, predicate: Any) -> list[Assertion]:
        key = Envelope.wrap(predicate).digest
        return [a for a in self._assertions if a.predicate.digest == key]

    def objects_for_predicate(self, predicate: Any) -> list["Envelope"]:
        return [a.object for a in self.assertions_with_predicate(predicate)]

    def extract_subject(self, target: type) -> Any:
        """Decode the subject into `target` (TypeMismatchError on failure)."""
        if target is Envelope:
            if isinstance(self._subject, Envelope):
                return self._subject
            return self
        return decode_as(self._subject, target)

    # ─── Wire form ──────────────────────────────────────────────

    def to_cbor(self) -> CBORTag:
        encoded = sorted(
            (as_cbor(a.to_cbor()) for a in self._assertions),
            key=canonical_bytes,
        )
        return CBORTag(cbor_tags.ENVELOPE, [as_cbor(self._subject), encoded])

    def to_bytes(self) -> bytes:
        return canonical_bytes(self)

    @property
    def digest(self) -> bytes:
        if self._digest is None:
            self._digest = self.to_bytes()
        return self._digest

    @classmethod
    def from_cbor(cls, value: Any) -> "Envelope":
        if not isinstance(value, CBORTag):
            raise InvalidTagError(cbor_tags.ENVELOPE, None)
        if value.tag != cbor_tags.ENVELOPE:
            raise InvalidTagError(cbor_tags.ENVELOPE, value.tag)
        content = value.value
        if not _is_array(content) or len(content) != 2 or not _is_array(content[1]):
            raise InvalidFormatError("Envelope content must be [subject, [assertions]]")
        subject, raw_assertions = content
        if isinstance(subject, CBORTag) and subject.tag == cbor_tags.ENVELOPE:
            subject = cls.from_cbor(subject)
        if subject is None:
            raise InvalidFormatError("Envelope subject cannot be null")
        assertions = []
        for raw in raw_assertions:
            if not _is_array(raw) or len(raw) != 2:
                raise InvalidFormatError("Assertion must be [predicate, object]")
            assertions.append(Assertion(cls.from_cbor(raw[0]), cls.from_cbor(raw[1])))
        return cls(subject, tuple(assertions))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Envelope":
        return cls.from_cbor(loads(data))

    # ─── Value semantics ────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Envelope):
            return NotImplemented
        return self.digest == other.digest

    def __hash__(self) -> int:
        return hash(self.digest)

    def __repr__(self) -> str:
        return f"Envelope({self._subject!r}, assertions={len(self._assertions)})"
