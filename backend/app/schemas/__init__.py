"""Pydantic Schemas — response contracts for API endpoints.

Invariants:
    - Schemas describe what leaves the system boundary
    - Separate from models: schemas are API contracts, models are persistence
"""
