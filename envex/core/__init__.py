"""Core Layer — identifiers, codec, registries and message shapes. No IO, no logging.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure; the Known-Registries are the only shared mutable state

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
