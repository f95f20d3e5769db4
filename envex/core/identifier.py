"""Identifier — dual-representation name for functions and parameters.

Invariants:
    - Exactly one variant: Known{code: uint64, name: str | None} or Named{value: str}
    - Known == Known iff codes are equal; the assigned name is cosmetic and ignored
    - Named == Named iff strings are equal; Known never equals Named
    - Identifiers of different roles (function vs parameter) are never equal
    - Display: Known -> assigned name or decimal code; Named -> value flanked by '"'

Design Decisions:
    - One generic base, one subclass per role carrying CBOR_TAG and its default registry
      (ADR: two roles share codec and registry logic instead of duplicating it)
    - int argument -> Known, str argument -> Named: mirrors integer/string literal shorthand
    - Immutable via __slots__ + no setters: identifiers are used as dict keys and predicates
"""

from typing import Any

from envex.core.cbor_values import is_unsigned
from envex.core.identifier_codec import decode_identifier, encode_identifier


class Identifier:
    """Base for FunctionIdentifier and ParameterIdentifier. Do not instantiate directly."""

    CBOR_TAG: int = -1
    ROLE: str = "identifier"

    __slots__ = ("_code", "_assigned_name", "_value")

    def __init__(self, code_or_value: int | str, name: str | None = None):
        if isinstance(code_or_value, bool):
            raise TypeError("bool is not a valid identifier code")
        if isinstance(code_or_value, int):
            if not is_unsigned(code_or_value):
                raise ValueError(
                    f"Identifier code must be a 64-bit unsigned integer, got {code_or_value}"
                )
            self._code: int | None = code_or_value
            self._assigned_name = name
            self._value: str | None = None
        elif isinstance(code_or_value, str):
            if name is not None:
                raise ValueError("Named identifiers carry no separate display name")
            self._code = None
            self._assigned_name = None
            self._value = code_or_value
        else:
            raise TypeError(
                f"{type(self).__name__} takes an int code or a str name, "
                f"got {type(code_or_value).__name__}"
            )

    # ─── Construction ───────────────────────────────────────────

    @classmethod
    def known(cls, code: int, name: str | None = None):
        return cls(code, name)

    @classmethod
    def named(cls, value: str):
        return cls(value)

    @classmethod
    def of(cls, literal: Any):
        """Single conversion entry point: identifier, int code or str name."""
        if isinstance(literal, cls):
            return literal
        if isinstance(literal, Identifier):
            raise TypeError(f"{literal!r} is not a {cls.__name__}")
        return cls(literal)

    @classmethod
    def default_registry(cls):
        raise NotImplementedError

    # ─── Accessors ──────────────────────────────────────────────

    @property
    def is_known(self) -> bool:
        return self._code is not None

    @property
    def is_named(self) -> bool:
        return self._value is not None

    @property
    def code(self) -> int | None:
        return self._code

    @property
    def assigned_name(self) -> str | None:
        return self._assigned_name

    @property
    def value(self) -> str | None:
        return self._value

    @property
    def name(self) -> str:
        if self._code is not None:
            return self._assigned_name if self._assigned_name is not None else str(self._code)
        return f'"{self._value}"'

    def description(self, registry=None) -> str:
        """Display name, resolved through an explicitly passed registry if given."""
        if self.is_known and registry is not None:
            return registry.name_for(self)
        return self.name

    # ─── Codec ──────────────────────────────────────────────────

    def to_cbor(self):
        return encode_identifier(self)

    @classmethod
    def from_cbor(cls, value: Any, registry=None):
        return decode_identifier(value, cls, registry)

    # ─── Value semantics ────────────────────────────────────────

    def _key(self) -> tuple:
        if self._code is not None:
            return ("known", self._code)
        return ("named", self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identifier):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((self.ROLE, *self._key()))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self._code is None:
            return f"{type(self).__name__}({self._value!r})"
        if self._assigned_name is None:
            return f"{type(self).__name__}({self._code})"
        return f"{type(self).__name__}({self._code}, {self._assigned_name!r})"
