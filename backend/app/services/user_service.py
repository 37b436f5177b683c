"""User Service — builds and mutates User entities from raw input, delegates to the store.

Invariants:
    - create_user stamps created_at and updated_at with the same instant
    - update_user never touches id or created_at; updated_at restamped
    - Each call is a single store round trip, no retries
    - Missing keys or an unparseable birthday raise DataFormatError before the store is called
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from app.core.domain_types import UserId
from app.core.errors import DataFormatError
from app.core.repository_protocols import UserStore
from app.core.user_payload import parse_birthday
from app.models.user import User

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserService:
    """CRUD orchestration for users."""

    def __init__(self, store: UserStore, clock: Callable[[], datetime] = utc_now):
        self._store = store
        self._clock = clock

    async def create_user(self, user_data: Mapping[str, object]) -> User:
        """Create and persist a new user from raw field data."""
        user = User()
        self._apply_fields(user, user_data)
        now = self._clock()
        user.created_at = now
        user.updated_at = now

        await self._store.insert(user)
        logger.info(f"User {user.id} created", extra={"user_id": user.id})
        return user

    async def update_user(self, user: User, user_data: Mapping[str, object]) -> User:
        """Overwrite writable fields of an existing user and persist."""
        self._apply_fields(user, user_data)
        user.updated_at = self._clock()

        await self._store.persist_update(user)
        logger.info(f"User {user.id} updated", extra={"user_id": user.id})
        return user

    async def delete_user(self, user: User) -> None:
        user_id = user.id
        await self._store.remove(user)
        logger.info(f"User {user_id} deleted", extra={"user_id": user_id})

    async def get_user_by_id(self, user_id: int) -> User | None:
        return await self._store.find_by_id(UserId(user_id))

    async def get_all_users(self) -> list[User]:
        return await self._store.find_all()

    @staticmethod
    def _apply_fields(user: User, user_data: Mapping[str, object]) -> None:
        try:
            email = user_data["email"]
            name = user_data["name"]
            age = user_data["age"]
            sex = user_data["sex"]
            birthday = user_data["birthday"]
            phone = user_data["phone"]
        except KeyError as e:
            raise DataFormatError(
                f"Отсутствует обязательное поле: {e.args[0]}", field=e.args[0],
            ) from e

        parsed_birthday = parse_birthday(birthday)
        if parsed_birthday is None:
            raise DataFormatError(
                "Дата рождения не должна быть пустой.", field="birthday",
            )

        if isinstance(age, bool) or not isinstance(age, int):
            raise DataFormatError(
                f"Возраст должен быть целым числом: {age!r}", field="age",
            )

        for key, value in (("email", email), ("name", name), ("sex", sex), ("phone", phone)):
            if not isinstance(value, str):
                raise DataFormatError(
                    f"Поле {key} должно быть строкой: {value!r}", field=key,
                )

        user.email = email
        user.name = name
        user.age = age
        user.sex = sex
        user.birthday = parsed_birthday
        user.phone = phone
