"""Tree Format — human-readable rendering of envelopes for debugging and tests.

Invariants:
    - Pure: display names come only from the identifiers themselves or from the
      registries passed in FormatContext — never from the global registries
    - Functions render «name», parameters ❰name❱, known values 'name', text "text"
    - Request/response subjects render request(CID(xxxxxxxx)) / response("unknown")
    - Each nesting level indents four spaces inside [ ... ]

Design Decisions:
    - Wire-decoded values are decoded against the context registries (or an empty one),
      so the same envelope formats identically regardless of global registry state
"""

from dataclasses import dataclass
from typing import Any

from cbor2 import CBORTag

from envex.core import cbor_tags
from envex.core.cid import CID
from envex.core.envelope import Envelope
from envex.core.functions import FunctionIdentifier
from envex.core.known_registry import KnownRegistry, name_for
from envex.core.known_values import KnownValue
from envex.core.parameters import ParameterIdentifier

INDENT = "    "


@dataclass(frozen=True)
class FormatContext:
    """Registries used to resolve display names; None means no lookup."""
    functions: KnownRegistry[FunctionIdentifier] | None = None
    parameters: KnownRegistry[ParameterIdentifier] | None = None
    known_values: KnownRegistry[KnownValue] | None = None


def format_envelope(envelope: Envelope, context: FormatContext | None = None) -> str:
    return _render(envelope, 0, context or FormatContext())


def _render(envelope: Envelope, level: int, ctx: FormatContext) -> str:
    subject = _leaf_text(envelope.subject, level, ctx)
    if envelope.is_leaf:
        return subject
    inner = INDENT * (level + 1)
    lines = [f"{subject} ["]
    for assertion in envelope.assertions:
        predicate = _render(assertion.predicate, level + 1, ctx)
        obj = _render(assertion.object, level + 1, ctx)
        lines.append(f"{inner}{predicate}: {obj}")
    lines.append(f"{INDENT * level}]")
    return "\n".join(lines)


def _leaf_text(value: Any, level: int, ctx: FormatContext) -> str:
    if isinstance(value, Envelope):
        return "{ " + _render(value, level, ctx) + " }"
    if isinstance(value, FunctionIdentifier):
        return f"«{name_for(value, ctx.functions)}»"
    if isinstance(value, ParameterIdentifier):
        return f"❰{name_for(value, ctx.parameters)}❱"
    if isinstance(value, KnownValue):
        return f"'{name_for(value, ctx.known_values)}'"
    if isinstance(value, CID):
        return str(value)
    if isinstance(value, CBORTag):
        return _tagged_text(value, level, ctx)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return f"Bytes({len(value)})"
    return str(value)


def _tagged_text(value: CBORTag, level: int, ctx: FormatContext) -> str:
    tag = value.tag
    if tag == cbor_tags.FUNCTION:
        registry = _or_empty(ctx.functions, FunctionIdentifier)
        return _leaf_text(FunctionIdentifier.from_cbor(value, registry), level, ctx)
    if tag == cbor_tags.PARAMETER:
        registry = _or_empty(ctx.parameters, ParameterIdentifier)
        return _leaf_text(ParameterIdentifier.from_cbor(value, registry), level, ctx)
    if tag == cbor_tags.KNOWN_VALUE:
        registry = _or_empty(ctx.known_values, KnownValue)
        return _leaf_text(KnownValue.from_cbor(value, registry), level, ctx)
    if tag == cbor_tags.CID:
        return str(CID.from_cbor(value))
    if tag == cbor_tags.REQUEST:
        return f"request({_leaf_text(value.value, level, ctx)})"
    if tag == cbor_tags.RESPONSE:
        return f"response({_leaf_text(value.value, level, ctx)})"
    return f"{tag}({_leaf_text(value.value, level, ctx)})"


def _or_empty(registry: KnownRegistry | None, kind: type) -> KnownRegistry:
    return registry if registry is not None else KnownRegistry(kind)
