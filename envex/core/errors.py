"""Error Hierarchy — typed, categorized exceptions for every envex failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Decode and extraction failures are value-level: they propagate to the immediate caller
    - RegistryPreconditionError is a programmer error (CRITICAL), never produced by wire input
    - MissingAssertionError IS-A WrongCardinalityError: zero matches is one cardinality failure

Design Decisions:
    - Single hierarchy with EnvexError base: callers catch one type at the shell boundary
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DECODING = "decoding"
    CARDINALITY = "cardinality"
    TYPE = "type"
    PRECONDITION = "precondition"
    LIMIT = "limit"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tag: int | None = None
    expected_tag: int | None = None
    predicate: str | None = None
    target_type: str | None = None
    debug_info: dict[str, Any] | None = None


class EnvexError(Exception):
    """Base exception for all envex errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_dict(self) -> dict:
        """Convert to a structured error payload (logs, error responses)."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "tag": self.context.tag,
                    "expected_tag": self.context.expected_tag,
                    "predicate": self.context.predicate,
                    "target_type": self.context.target_type,
                },
            }
        }


# ─── Decoding Errors ────────────────────────────────────────────

class InvalidTagError(EnvexError):
    """Outer CBOR tag does not match the expected role tag."""
    def __init__(
        self, expected: int, actual: int | None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.tag = actual
        ctx.expected_tag = expected
        found = "untagged value" if actual is None else f"tag {actual}"
        super().__init__(
            f"Expected CBOR tag {expected}, found {found}",
            "INVALID_TAG", ErrorCategory.DECODING,
            ErrorSeverity.ERROR, ctx,
        )
        self.expected = expected
        self.actual = actual


class InvalidFormatError(EnvexError):
    """Content under a valid tag has an unexpected shape."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_FORMAT", ErrorCategory.DECODING,
            ErrorSeverity.ERROR, context,
        )


# ─── Extraction Errors ──────────────────────────────────────────

class WrongCardinalityError(EnvexError):
    """Exactly-one extraction found a number of matches other than one."""
    def __init__(
        self,
        predicate: str,
        count: int,
        context: ErrorContext | None = None,
        code: str = "WRONG_CARDINALITY",
    ):
        ctx = context or ErrorContext()
        ctx.predicate = predicate
        super().__init__(
            f"Expected exactly one assertion for predicate {predicate}, found {count}",
            code, ErrorCategory.CARDINALITY,
            ErrorSeverity.ERROR, ctx,
        )
        self.predicate = predicate
        self.count = count


class MissingAssertionError(WrongCardinalityError):
    """Exactly-one extraction found no matching assertion."""
    def __init__(self, predicate: str, context: ErrorContext | None = None):
        super().__init__(predicate, 0, context, code="MISSING_ASSERTION")


class TypeMismatchError(EnvexError):
    """A matched object could not be decoded into the requested type."""
    def __init__(
        self, target_type: str, detail: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.target_type = target_type
        super().__init__(
            f"Cannot decode object as {target_type}: {detail}",
            "TYPE_MISMATCH", ErrorCategory.TYPE,
            ErrorSeverity.ERROR, ctx,
        )
        self.target_type = target_type


# ─── Programmer Errors ──────────────────────────────────────────

class RegistryPreconditionError(EnvexError):
    """Attempted to register a Named identifier, or an entry of another role, into a Known-Registry."""
    def __init__(
        self, item: object, reason: str = "Only known (numeric) entries may be registered",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{reason}, got {item!r}",
            "PRECONDITION_VIOLATION", ErrorCategory.PRECONDITION,
            ErrorSeverity.CRITICAL, context,
        )
        self.item = item


class MessageTooLargeError(EnvexError):
    """Encoded message exceeds the configured size limit."""
    def __init__(self, size: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Message of {size} bytes exceeds limit of {limit} bytes",
            "MESSAGE_TOO_LARGE", ErrorCategory.LIMIT,
            ErrorSeverity.WARNING, context,
        )
        self.size = size
        self.limit = limit
