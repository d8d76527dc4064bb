"""User administration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from baraza.application.schemas import EmailChange, UserCreate, UserResponse, UserUpdate
from baraza.application.services import UserService
from baraza.domain.authorization import is_permitted
from baraza.domain.entities import User
from baraza.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from baraza.infrastructure.dependencies import (
    get_current_user,
    get_user_service,
    require_permission,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    skip: int = 0,
    limit: int = 100,
    _: User | None = Depends(require_permission("users", "index")),
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    users = await service.list_users(skip=skip, limit=limit)
    return [UserResponse.model_validate(u, from_attributes=True) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    _: User | None = Depends(require_permission("users", "show")),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.get_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    _: User | None = Depends(require_permission("users", "create")),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        user = await service.create_user(data)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.messages)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    _: User | None = Depends(require_permission("users", "update")),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update profile fields; a role change triggers its notifications."""
    try:
        user = await service.update_user(user_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.put("/{user_id}/email", response_model=UserResponse)
async def change_email(
    user_id: int,
    data: EmailChange,
    current_user: User | None = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Change a user's own email address."""
    try:
        target = await service.get_user(user_id)
        if not is_permitted(current_user, "users", "change_email", target):
            raise PermissionDeniedError("users", "change_email")
        user = await service.change_email(user_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return UserResponse.model_validate(user, from_attributes=True)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    _: User | None = Depends(require_permission("users", "destroy")),
    service: UserService = Depends(get_user_service),
) -> None:
    try:
        await service.delete_user(user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
