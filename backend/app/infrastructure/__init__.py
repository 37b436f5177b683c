"""Infrastructure Layer — database access, persistence adapters, logging.

Invariants:
    - Driver/ORM exceptions never leave this layer unmapped (PersistenceError)
"""
