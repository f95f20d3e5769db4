"""Known-Registry — process-wide table resolving numeric codes to canonical entries.

Invariants:
    - Keyed by code only: the display name is carried by the stored canonical entry
    - register() is last-write-wins: a colliding code is overwritten silently
    - Only known (numeric) entries of the registry's own kind are accepted; a Named
      identifier or an entry of another role raises RegistryPreconditionError at the
      insertion boundary
    - canonical_or_bare(code) never fails: unregistered codes yield kind(code)

Design Decisions:
    - One generic registry for function identifiers, parameter identifiers and known
      values: each role instantiates its own table (ADR: no duplicated registry logic)
    - threading.Lock around every read and write: registration racing a decode is
      well-defined, but decode output may change once registration happens
    - Mutation after first use is a feature: identical wire bytes rehydrate to the
      newest registered display name
"""

import threading
from typing import Generic, Iterable, Iterator, Protocol, TypeVar

from envex.core.errors import RegistryPreconditionError


class KnownEntry(Protocol):
    """Structural contract for registry entries (known identifiers, known values)."""
    @property
    def is_known(self) -> bool: ...
    @property
    def code(self) -> int | None: ...
    @property
    def assigned_name(self) -> str | None: ...
    @property
    def name(self) -> str: ...


T = TypeVar("T", bound=KnownEntry)


class KnownRegistry(Generic[T]):
    """Thread-guarded mapping of code -> canonical entry for one role."""

    def __init__(self, kind: type[T], entries: Iterable[T] = ()):
        self._kind = kind
        self._lock = threading.Lock()
        self._entries: dict[int, T] = {}
        for entry in entries:
            self.register(entry)

    def register(self, entry: T) -> None:
        """Insert or overwrite the entry for entry.code."""
        self._check(entry)
        with self._lock:
            self._entries[entry.code] = entry

    def lookup(self, code: int) -> T | None:
        with self._lock:
            return self._entries.get(code)

    def canonical_or_bare(self, code: int) -> T:
        """Registered canonical entry for code, or a bare kind(code)."""
        entry = self.lookup(code)
        return entry if entry is not None else self._kind(code)

    def assigned_name(self, entry: T) -> str | None:
        """Name registered for entry's code, if any."""
        if not entry.is_known or entry.code is None:
            return None
        registered = self.lookup(entry.code)
        return registered.assigned_name if registered is not None else None

    def name_for(self, entry: T) -> str:
        """Registered name, falling back to the entry's own display name."""
        return self.assigned_name(entry) or entry.name

    def reset(self, entries: Iterable[T]) -> None:
        """Replace the whole table (startup seeding, test isolation)."""
        fresh: dict[int, T] = {}
        for entry in entries:
            self._check(entry)
            fresh[entry.code] = entry
        with self._lock:
            self._entries = fresh

    def _check(self, entry: T) -> None:
        if not isinstance(entry, self._kind):
            raise RegistryPreconditionError(
                entry, f"Only {self._kind.__name__} entries may be registered here",
            )
        if not entry.is_known or entry.code is None:
            raise RegistryPreconditionError(entry)

    def copy(self) -> "KnownRegistry[T]":
        """Independent snapshot; later registrations on either side do not leak."""
        return KnownRegistry(self._kind, list(self))

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = sorted(self._entries.items())
        return iter([entry for _, entry in snapshot])


def name_for(entry: KnownEntry, registry: KnownRegistry | None = None) -> str:
    """Display name of entry, resolved through an explicitly passed registry."""
    if registry is None:
        return entry.name
    return registry.name_for(entry)
