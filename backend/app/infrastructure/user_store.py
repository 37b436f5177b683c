"""User Store — SQLAlchemy implementation of the UserStore protocol.

Invariants:
    - Every mutating call commits before returning (no batching across requests)
    - insert/persist_update refresh the instance so id and stored values are current
    - Any SQLAlchemyError is rolled back and re-raised as PersistenceError;
      the store does not interpret driver errors
    - find_all returns users in insertion (id) order
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserId
from app.core.errors import PersistenceError
from app.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserStore:
    """UserStore backed by one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_id(self, user_id: UserId) -> User | None:
        try:
            return await self._db.get(User, user_id)
        except SQLAlchemyError as e:
            raise await self._fail("find", e) from e

    async def find_all(self) -> list[User]:
        try:
            result = await self._db.execute(select(User).order_by(User.id))
        except SQLAlchemyError as e:
            raise await self._fail("find_all", e) from e
        return list(result.scalars().all())

    async def insert(self, user: User) -> None:
        try:
            self._db.add(user)
            await self._db.commit()
            await self._db.refresh(user)
        except SQLAlchemyError as e:
            raise await self._fail("insert", e) from e

    async def persist_update(self, user: User) -> None:
        try:
            await self._db.commit()
            await self._db.refresh(user)
        except SQLAlchemyError as e:
            raise await self._fail("update", e) from e

    async def remove(self, user: User) -> None:
        try:
            await self._db.delete(user)
            await self._db.commit()
        except SQLAlchemyError as e:
            raise await self._fail("delete", e) from e

    async def _fail(self, operation: str, exc: SQLAlchemyError) -> PersistenceError:
        await self._db.rollback()
        logger.error(
            f"User store {operation} failed: {exc}",
            extra={"operation": operation, "error_code": "PERSISTENCE_ERROR"},
        )
        return PersistenceError(str(getattr(exc, "orig", None) or exc), operation)
