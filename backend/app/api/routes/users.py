"""User Routes — CRUD endpoints under /user.

Invariants:
    - {user_id} is resolved explicitly by get_user_or_404 before any handler logic
      (non-integer or unknown id → 404)
    - Rule violations → 400 {message, errors: [...]}; nothing is persisted
    - Any other failure in create/update/delete → 400 {message, error: str(exc)},
      or 500 for persistence/unexpected failures when separate_server_errors is on
    - Responses keep non-ASCII text unescaped (Starlette JSONResponse, ensure_ascii=False)

Design Decisions:
    - Body read as raw bytes, not a Pydantic model: the rule list reports every
      violation with its own message and malformed JSON maps to DataFormatError
    - get_user_service is a dependency so tests can swap the store
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.errors import (
    DataFormatError, ResourceNotFoundError, UserValidationError,
)
from app.core.user_payload import parse_user_payload
from app.core.user_rules import validate_user
from app.infrastructure.database import get_db
from app.infrastructure.user_store import SqlAlchemyUserStore
from app.models.user import User
from app.schemas.user import serialize_user
from app.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["users"])

USER_CREATED = "Пользователь создан"
USER_UPDATED = "Пользователь обновлен"
USER_DELETED = "Пользователь удален"
CREATE_FAILED = "Ошибка создания пользователя"
UPDATE_FAILED = "Ошибка обновления пользователя"
DELETE_FAILED = "Ошибка удаления пользователя"

_CLIENT_ERRORS = (DataFormatError, UserValidationError)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlAlchemyUserStore(db))


def parse_user_id(raw: str) -> int | None:
    """Path segment → positive 64-bit id, or None."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if 0 < value < 2**63 else None


async def get_user_or_404(user_id: str, service: UserService) -> User:
    """Parse the path id and load the user, or raise 404."""
    user = None
    parsed = parse_user_id(user_id)
    if parsed is not None:
        user = await service.get_user_by_id(parsed)
    if user is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=ResourceNotFoundError("User", user_id).to_response(),
        )
    return user


def _validation_failed(message: str, errors: list[str], request: Request) -> JSONResponse:
    logger.warning(
        f"User rejected on {request.url.path}: {errors}",
        extra={"path": request.url.path, "method": request.method,
               "error_code": "VALIDATION_ERROR"},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, "errors": errors},
    )


def _operation_failed(
    message: str, exc: Exception, request: Request, settings: Settings,
) -> JSONResponse:
    status_code = status.HTTP_400_BAD_REQUEST
    if settings.separate_server_errors and not isinstance(exc, _CLIENT_ERRORS):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.error(
        f"{message}: {exc}",
        extra={"path": request.url.path, "method": request.method,
               "error_code": getattr(exc, "code", type(exc).__name__)},
        exc_info=not isinstance(exc, _CLIENT_ERRORS),
    )
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "error": str(exc)},
    )


@router.get("", status_code=status.HTTP_200_OK)
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users in insertion order."""
    users = await service.get_all_users()
    return [serialize_user(u) for u in users]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Create a user from a JSON body."""
    try:
        candidate = parse_user_payload(await request.body())
        errors = validate_user(candidate)
        if errors:
            return _validation_failed(CREATE_FAILED, errors, request)
        user = await service.create_user(candidate)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={"message": USER_CREATED, "user": serialize_user(user)},
        )
    except Exception as e:
        return _operation_failed(CREATE_FAILED, e, request, settings)


@router.get("/{user_id}")
async def show_user(
    user_id: str, service: UserService = Depends(get_user_service),
):
    """Get one user."""
    user = await get_user_or_404(user_id, service)
    return {"user": serialize_user(user)}


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Replace every writable field of a user."""
    user = await get_user_or_404(user_id, service)
    try:
        candidate = parse_user_payload(await request.body())
        errors = validate_user(candidate)
        if errors:
            return _validation_failed(UPDATE_FAILED, errors, request)
        user = await service.update_user(user, candidate)
        return {"message": USER_UPDATED, "user": serialize_user(user)}
    except Exception as e:
        return _operation_failed(UPDATE_FAILED, e, request, settings)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Hard-delete a user."""
    user = await get_user_or_404(user_id, service)
    try:
        await service.delete_user(user)
    except Exception as e:
        return _operation_failed(DELETE_FAILED, e, request, settings)
    return {"message": USER_DELETED}
