"""Newsletter subscription endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from baraza.application.schemas import SubscriberCreate, SubscriberResponse
from baraza.application.services import SubscriberService
from baraza.domain.authorization import is_permitted
from baraza.domain.entities import Subscriber, User
from baraza.domain.exceptions import EntityNotFoundError, PermissionDeniedError
from baraza.infrastructure.dependencies import (
    get_current_user,
    get_subscriber_service,
    require_permission,
)

router = APIRouter(prefix="/subscribers", tags=["Subscribers"])


@router.post("", response_model=SubscriberResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(
    data: SubscriberCreate,
    _: User | None = Depends(require_permission("subscribers", "create")),
    service: SubscriberService = Depends(get_subscriber_service),
) -> SubscriberResponse:
    subscriber = await service.subscribe(data)
    return SubscriberResponse.model_validate(subscriber, from_attributes=True)


@router.get("", response_model=list[SubscriberResponse])
async def list_subscribers(
    _: User | None = Depends(require_permission("subscribers", "index")),
    service: SubscriberService = Depends(get_subscriber_service),
) -> list[SubscriberResponse]:
    subscribers = await service.list_subscribers()
    return [SubscriberResponse.model_validate(s, from_attributes=True) for s in subscribers]


@router.delete("/{email}", status_code=status.HTTP_204_NO_CONTENT)
async def unsubscribe(
    email: str,
    current_user: User | None = Depends(get_current_user),
    service: SubscriberService = Depends(get_subscriber_service),
) -> None:
    """Remove an address. Users may only remove their own; administrators any."""
    if not is_permitted(current_user, "subscribers", "destroy", Subscriber(email=email)):
        raise PermissionDeniedError("subscribers", "destroy")
    try:
        await service.unsubscribe(email)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
