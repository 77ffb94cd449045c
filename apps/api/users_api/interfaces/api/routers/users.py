import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import ValidationError

from users_api.infrastructure.db import connection as db
from users_api.infrastructure.db.gateway import StorageGateway
from users_api.infrastructure.db.user_repository import UserRepository
from users_api.interfaces.api.schemas import (
    UserCreated,
    UserFields,
    UserPublic,
    invalid_fields,
    parse_user_fields,
)

router = APIRouter()
logger = logging.getLogger("users")


def get_gateway() -> StorageGateway:
    return StorageGateway(db.get_pool())


def get_user_repository(
    gateway: StorageGateway = Depends(get_gateway),
) -> UserRepository:
    return UserRepository(gateway)


def _require_fields(payload: Optional[Any]) -> UserFields:
    # Validation failures answer 500, not 400/422.
    try:
        return parse_user_fields(payload)
    except ValidationError as exc:
        missing = invalid_fields(exc)
        logger.warning("User payload rejected", extra={"missing": missing})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Missing required user fields", "missing": missing},
        ) from exc


def _user_not_found(user_id: int) -> HTTPException:
    logger.info("User not found", extra={"user_id": user_id})
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
    )


@router.get("/users", response_model=List[UserPublic])
def list_users(
    repo: UserRepository = Depends(get_user_repository),
) -> List[UserPublic]:
    return [UserPublic(**vars(user)) for user in repo.list_users()]


@router.get("/users/{user_id}", response_model=UserPublic)
def get_user(
    user_id: int,
    repo: UserRepository = Depends(get_user_repository),
) -> UserPublic:
    user = repo.get_user(user_id)
    if user is None:
        raise _user_not_found(user_id)
    return UserPublic(**vars(user))


@router.post(
    "/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED
)
def create_user(
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
) -> UserCreated:
    fields = _require_fields(payload)
    user_id = repo.create_user(fields)
    logger.info("User created", extra={"user_id": user_id})
    return UserCreated(id=user_id)


@router.put("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    user_id: int,
    payload: Any = Body(default=None),
    repo: UserRepository = Depends(get_user_repository),
) -> Response:
    fields = _require_fields(payload)
    if repo.update_user(user_id, fields) == 0:
        raise _user_not_found(user_id)
    logger.info("User updated", extra={"user_id": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
