"""Cardinality-Checked Extraction — typed queries over an envelope's assertions.

Invariants:
    - extract_one: exactly one match, else MissingAssertionError (0) or
      WrongCardinalityError (>1); decode failure -> TypeMismatchError
    - extract_many: never fails on count (empty list when nothing matches); one bad
      element aborts the whole list with TypeMismatchError
    - extract_optional: None on zero matches, otherwise behaves like extract_one
    - is_result_ok: exactly one `result`, compared by value to the OK sentinel; a result
      of any other kind is simply not OK

Design Decisions:
    - Target Envelope returns the matched object envelopes undecoded (result()/results())
    - Cardinality is checked before any decoding: a count error wins over a type error
"""

from typing import Any

from envex.core.cbor_values import canonical_bytes
from envex.core.envelope import Envelope
from envex.core.errors import MissingAssertionError, WrongCardinalityError
from envex.core.known_values import ERROR, OK, RESULT


def _predicate_label(predicate: Any) -> str:
    name = getattr(predicate, "name", None)
    return name if isinstance(name, str) else repr(predicate)


def _only_object(envelope: Envelope, predicate: Any) -> Envelope | None:
    objects = envelope.objects_for_predicate(predicate)
    if not objects:
        return None
    if len(objects) > 1:
        raise WrongCardinalityError(_predicate_label(predicate), len(objects))
    return objects[0]


def extract_one(envelope: Envelope, predicate: Any, target: type) -> Any:
    obj = _only_object(envelope, predicate)
    if obj is None:
        raise MissingAssertionError(_predicate_label(predicate))
    return obj.extract_subject(target) if target is not Envelope else obj


def extract_optional(envelope: Envelope, predicate: Any, target: type) -> Any | None:
    obj = _only_object(envelope, predicate)
    if obj is None:
        return None
    return obj.extract_subject(target) if target is not Envelope else obj


def extract_many(envelope: Envelope, predicate: Any, target: type) -> list:
    objects = envelope.objects_for_predicate(predicate)
    if target is Envelope:
        return objects
    return [obj.extract_subject(target) for obj in objects]


# ─── Result / error specialisations ──────────────────────────────

def result(envelope: Envelope) -> Envelope:
    """The object of the single `result` assertion."""
    return extract_one(envelope, RESULT, Envelope)


def results(envelope: Envelope) -> list[Envelope]:
    """The objects of every `result` assertion."""
    return extract_many(envelope, RESULT, Envelope)


def extract_result(envelope: Envelope, target: type) -> Any:
    return extract_one(envelope, RESULT, target)


def extract_results(envelope: Envelope, target: type) -> list:
    return extract_many(envelope, RESULT, target)


def extract_error(envelope: Envelope, target: type) -> Any:
    return extract_one(envelope, ERROR, target)


def is_result_ok(envelope: Envelope) -> bool:
    """True when the single `result` is the OK known value."""
    obj = result(envelope)
    return obj.is_leaf and canonical_bytes(obj.subject) == canonical_bytes(OK)
