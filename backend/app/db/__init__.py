"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Engine and sessions live in infrastructure/database.py; this package only owns metadata
"""
