"""Services Layer — imperative shell around the pure core: settings, logging, wire bytes.

Invariants:
    - Services may import core/ and infrastructure/; core/ never imports services/
    - Errors from core/ are logged here and re-raised unchanged
"""
