"""Parameters — parameter identifiers and the well-known parameter table.

Invariants:
    - ParameterIdentifier is tagged PARAMETER on the wire and used as an assertion predicate;
      the assertion's object is the argument
    - GLOBAL_PARAMETERS is seeded with `_`, `lhs`, `rhs` at import
"""

from envex.core import cbor_tags
from envex.core.identifier import Identifier
from envex.core.known_registry import KnownRegistry


class ParameterIdentifier(Identifier):
    """Identifies one argument of an expression envelope."""

    CBOR_TAG = cbor_tags.PARAMETER
    ROLE = "parameter"

    __slots__ = ()

    @classmethod
    def default_registry(cls) -> KnownRegistry["ParameterIdentifier"]:
        return GLOBAL_PARAMETERS


BLANK = ParameterIdentifier(1, "_")
LHS = ParameterIdentifier(2, "lhs")
RHS = ParameterIdentifier(3, "rhs")

WELL_KNOWN_PARAMETERS: tuple[ParameterIdentifier, ...] = (BLANK, LHS, RHS)

GLOBAL_PARAMETERS: KnownRegistry[ParameterIdentifier] = KnownRegistry(
    ParameterIdentifier, WELL_KNOWN_PARAMETERS,
)
