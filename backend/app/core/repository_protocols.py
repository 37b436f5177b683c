"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every mutating store call commits before returning

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO
"""

from datetime import date, datetime
from typing import Protocol

from app.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for User objects handled by the service.

    Avoids coupling the service to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: int | None
    email: str
    name: str
    age: int
    sex: str
    birthday: date
    phone: str
    created_at: datetime
    updated_at: datetime


class UserStore(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def find_all(self) -> list[UserLike]: ...
    async def insert(self, user: UserLike) -> None: ...
    async def persist_update(self, user: UserLike) -> None: ...
    async def remove(self, user: UserLike) -> None: ...
