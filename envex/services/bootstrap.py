"""Bootstrap — one-time process setup: logging plus registry extension from settings.

Invariants:
    - initialize() installs the log handler at most once per process
    - Configured extra functions/parameters are registered last-write-wins on top of the
      well-known seeds; overwriting a seeded name is logged, never rejected
    - Registration happens here, before messages are decoded; later registration is
      allowed but changes subsequent decode output

Design Decisions:
    - Registries passed in explicitly (defaulting to the globals): tests use snapshots
"""

import logging

from envex.config import Settings, get_settings
from envex.core.functions import GLOBAL_FUNCTIONS, FunctionIdentifier
from envex.core.known_registry import KnownRegistry
from envex.core.parameters import GLOBAL_PARAMETERS, ParameterIdentifier
from envex.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

_handler: logging.Handler | None = None


def initialize(settings: Settings | None = None) -> None:
    """Configure logging and extend the global registries from settings."""
    global _handler
    settings = settings or get_settings()
    if _handler is None:
        _handler = setup_logging(settings.log_level, settings.log_format)
    register_extensions(settings)


def register_extensions(
    settings: Settings,
    functions: KnownRegistry[FunctionIdentifier] = GLOBAL_FUNCTIONS,
    parameters: KnownRegistry[ParameterIdentifier] = GLOBAL_PARAMETERS,
) -> int:
    """Register settings.extra_functions / extra_parameters. Returns the count added."""
    count = 0
    for code, name in sorted(settings.extra_functions.items()):
        _register(functions, FunctionIdentifier(code, name))
        count += 1
    for code, name in sorted(settings.extra_parameters.items()):
        _register(parameters, ParameterIdentifier(code, name))
        count += 1
    logger.info(
        "Registered %d configured identifiers", count, extra={"count": count},
    )
    return count


def _register(registry: KnownRegistry, identifier) -> None:
    previous = registry.lookup(identifier.code)
    if previous is not None and previous.assigned_name != identifier.assigned_name:
        logger.warning(
            "Overriding %s %d: %s -> %s",
            identifier.ROLE, identifier.code, previous.name, identifier.name,
            extra={"role": identifier.ROLE, "code": identifier.code},
        )
    registry.register(identifier)
