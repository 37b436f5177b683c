"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int — ids are assigned by the store, never by clients
    - Sex is the closed set of accepted values ("male" | "female")
    - USER_FIELDS lists the client-writable fields in validation order

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Sex(str, Enum):
    """Accepted values for User.sex."""
    MALE = "male"
    FEMALE = "female"


# ─── Field Catalogue ─────────────────────────────────────────────

USER_FIELDS: tuple[str, ...] = (
    "email", "name", "age", "sex", "birthday", "phone",
)

NAME_MAX_LENGTH: int = 255
AGE_MIN: int = 0
AGE_MAX: int = 150
PHONE_PATTERN: str = r"^\+\d{1,3} \(\d{3}\) \d{3}-\d{4}\Z"
