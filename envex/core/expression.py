"""Expressions — function-call envelopes and their parameter assertions.

Invariants:
    - A function-call envelope's subject is a FunctionIdentifier
    - add_parameter(e, p, None) returns e unchanged: an absent argument is not an error
    - add_parameter(e, p, v) adds exactly one (p, v) assertion and never removes or
      reorders existing ones
    - Argument lookups are cardinality-checked (see extraction)

Design Decisions:
    - Literal shorthand accepted everywhere an identifier is: int -> Known, str -> Named
"""

from typing import Any

from envex.core.envelope import Assertion, Envelope
from envex.core.extraction import extract_many, extract_one
from envex.core.functions import FunctionIdentifier
from envex.core.known_registry import KnownRegistry
from envex.core.parameters import ParameterIdentifier


def function_envelope(function: FunctionIdentifier | int | str) -> Envelope:
    """Envelope whose subject is the function identifier."""
    return Envelope(FunctionIdentifier.of(function))


def parameter_assertion(
    param: ParameterIdentifier | int | str, value: Any,
) -> Assertion | None:
    """A `param: value` assertion, or None when the value is absent."""
    if value is None:
        return None
    return Assertion(
        Envelope(ParameterIdentifier.of(param)), Envelope.wrap(value),
    )


def add_parameter(
    envelope: Envelope, param: ParameterIdentifier | int | str, value: Any,
) -> Envelope:
    """Add a `param: value` assertion; returns the input envelope when value is None."""
    assertion = parameter_assertion(param, value)
    if assertion is None:
        return envelope
    return envelope.add_assertions([assertion])


def extract_function(
    envelope: Envelope, registry: KnownRegistry[FunctionIdentifier] | None = None,
) -> FunctionIdentifier:
    """The function identifier in the envelope's subject."""
    subject = envelope.subject
    if isinstance(subject, FunctionIdentifier):
        return subject
    return FunctionIdentifier.from_cbor(subject, registry)


def extract_argument(
    envelope: Envelope, param: ParameterIdentifier | int | str, target: type,
) -> Any:
    """The single argument for `param`, decoded to `target`."""
    return extract_one(envelope, ParameterIdentifier.of(param), target)


def extract_arguments(
    envelope: Envelope, param: ParameterIdentifier | int | str, target: type,
) -> list:
    """Every argument for `param`, decoded to `target`."""
    return extract_many(envelope, ParameterIdentifier.of(param), target)
