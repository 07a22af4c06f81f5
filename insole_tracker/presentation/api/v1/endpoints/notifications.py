"""Live notification endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from insole_tracker.application.schemas import NotificationResponse
from insole_tracker.application.services import NotificationQueue
from insole_tracker.infrastructure.dependencies import get_notification_queue

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    queue: NotificationQueue = Depends(get_notification_queue),
) -> list[NotificationResponse]:
    """Notifications that have not yet expired, oldest first."""
    return [NotificationResponse.model_validate(n, from_attributes=True) for n in queue.entries]


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def dismiss_notification(
    notification_id: int,
    queue: NotificationQueue = Depends(get_notification_queue),
) -> None:
    if not queue.dismiss(notification_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification {notification_id} not found",
        )
