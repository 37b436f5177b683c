"""User Registry Application Package — CRUD API for User records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
