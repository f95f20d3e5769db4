"""Functions — function identifiers and the well-known function table.

Invariants:
    - FunctionIdentifier is tagged FUNCTION on the wire
    - GLOBAL_FUNCTIONS is seeded with codes 1–15 at import; later registrations overwrite

Design Decisions:
    - Seeded independently of parameters: the two registries are parallel instances
"""

from envex.core import cbor_tags
from envex.core.identifier import Identifier
from envex.core.known_registry import KnownRegistry


class FunctionIdentifier(Identifier):
    """Identifies the function of an expression envelope (its subject)."""

    CBOR_TAG = cbor_tags.FUNCTION
    ROLE = "function"

    __slots__ = ()

    @classmethod
    def default_registry(cls) -> KnownRegistry["FunctionIdentifier"]:
        return GLOBAL_FUNCTIONS


ADD = FunctionIdentifier(1, "add")    # addition
SUB = FunctionIdentifier(2, "sub")    # subtraction
MUL = FunctionIdentifier(3, "mul")    # multiplication
DIV = FunctionIdentifier(4, "div")    # division
NEG = FunctionIdentifier(5, "neg")    # unary negation
LT = FunctionIdentifier(6, "lt")      # less than
LE = FunctionIdentifier(7, "le")      # less than or equal to
GT = FunctionIdentifier(8, "gt")      # greater than
GE = FunctionIdentifier(9, "ge")      # greater than or equal to
EQ = FunctionIdentifier(10, "eq")     # equal to
NE = FunctionIdentifier(11, "ne")     # not equal to
AND = FunctionIdentifier(12, "and")   # logical and
OR = FunctionIdentifier(13, "or")     # logical or
XOR = FunctionIdentifier(14, "xor")   # logical exclusive or
NOT = FunctionIdentifier(15, "not")   # logical not

WELL_KNOWN_FUNCTIONS: tuple[FunctionIdentifier, ...] = (
    ADD, SUB, MUL, DIV, NEG,
    LT, LE, GT, GE, EQ, NE,
    AND, OR, XOR, NOT,
)

GLOBAL_FUNCTIONS: KnownRegistry[FunctionIdentifier] = KnownRegistry(
    FunctionIdentifier, WELL_KNOWN_FUNCTIONS,
)
