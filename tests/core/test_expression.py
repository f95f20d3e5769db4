"""Expression Builder — function-call envelopes and parameter assertions.

Tests cover:
    - function_envelope accepts identifiers and literals
    - Absent parameter value is a no-op (same envelope returned)
    - Present parameter adds exactly one assertion, keeping the existing ones
    - Named parameters via string literals
    - extract_function / extract_argument / extract_arguments, in memory and off the wire
"""

import pytest

from envex.core.envelope import Assertion, Envelope
from envex.core.errors import MissingAssertionError, TypeMismatchError, WrongCardinalityError
from envex.core.expression import (
    add_parameter,
    extract_argument,
    extract_arguments,
    extract_function,
    function_envelope,
    parameter_assertion,
)
from envex.core.functions import ADD, FunctionIdentifier
from envex.core.known_registry import KnownRegistry
from envex.core.parameters import LHS, RHS, ParameterIdentifier


def _two_plus_three() -> Envelope:
    envelope = function_envelope(ADD)
    envelope = add_parameter(envelope, LHS, 2)
    return add_parameter(envelope, RHS, 3)


# ─── Construction ────────────────────────────────────────────────

def test_function_envelope_subject_is_identifier():
    assert function_envelope(ADD).subject == ADD
    assert function_envelope(1).subject == ADD
    assert function_envelope("foo").subject == FunctionIdentifier("foo")


def test_absent_parameter_is_noop():
    envelope = _two_plus_three()
    assert add_parameter(envelope, "extra", None) is envelope
    assert parameter_assertion(LHS, None) is None


def test_present_parameter_adds_exactly_one_assertion():
    base = _two_plus_three()
    extended = add_parameter(base, "scale", 10)
    assert len(extended.assertions) == len(base.assertions) + 1
    assert set(extended.assertions) - set(base.assertions) == {
        Assertion(Envelope(ParameterIdentifier("scale")), Envelope(10)),
    }
    assert set(base.assertions) <= set(extended.assertions)


def test_parameter_value_may_be_an_envelope():
    inner = _two_plus_three()
    outer = add_parameter(function_envelope("apply"), "expr", inner)
    assert extract_argument(outer, "expr", Envelope) == inner


# ─── Extraction ──────────────────────────────────────────────────

def test_extract_function_and_arguments():
    envelope = _two_plus_three()
    assert extract_function(envelope) == ADD
    assert extract_argument(envelope, LHS, int) == 2
    assert extract_argument(envelope, RHS, int) == 3


def test_extract_after_wire_round_trip():
    decoded = Envelope.from_bytes(_two_plus_three().to_bytes())
    function = extract_function(decoded)
    assert function == ADD
    assert function.name == "add"
    assert extract_argument(decoded, 2, int) == 2


def test_extract_function_with_explicit_registry():
    decoded = Envelope.from_bytes(function_envelope(ADD).to_bytes())
    registry = KnownRegistry(FunctionIdentifier, [FunctionIdentifier(1, "plus")])
    assert extract_function(decoded, registry).name == "plus"


def test_extract_argument_missing():
    with pytest.raises(MissingAssertionError):
        extract_argument(_two_plus_three(), "missing", int)


def test_extract_argument_ambiguous():
    envelope = add_parameter(_two_plus_three(), LHS, 20)
    with pytest.raises(WrongCardinalityError) as exc:
        extract_argument(envelope, LHS, int)
    assert exc.value.count == 2
    assert sorted(extract_arguments(envelope, LHS, int)) == [2, 20]


def test_extract_argument_wrong_type():
    with pytest.raises(TypeMismatchError):
        extract_argument(_two_plus_three(), LHS, str)


def test_extract_arguments_empty():
    assert extract_arguments(_two_plus_three(), "none", int) == []
