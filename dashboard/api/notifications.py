from fastapi import APIRouter, Depends, status
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.api.deps import get_user_id
from dashboard.db.session import get_session
from dashboard.errors import NotFound
from dashboard.models.inbox_notification import InboxNotification
from dashboard.schemas.common import ApiResponse, CountRead
from dashboard.schemas.inbox import InboxNotificationCreate, InboxNotificationRead

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


async def _get_notification(session: AsyncSession, user_id: str, notification_id: str) -> InboxNotification:
    notification = await session.get(InboxNotification, notification_id)
    if notification is None or notification.user_id != user_id:
        raise NotFound("Notification not found", f"No notification found with ID: {notification_id}")
    return notification


@router.get("", response_model=ApiResponse[list[InboxNotificationRead]])
async def list_notifications(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    rows = await session.scalars(
        select(InboxNotification)
        .where(InboxNotification.user_id == user_id)
        .order_by(InboxNotification.created_at.desc(), InboxNotification.id.desc())
    )
    return ApiResponse(data=[InboxNotificationRead.model_validate(item) for item in rows.all()])


@router.get("/unread-count", response_model=ApiResponse[CountRead])
async def unread_count(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    count = await session.scalar(
        select(func.count(InboxNotification.id)).where(
            InboxNotification.user_id == user_id,
            InboxNotification.is_read.is_(False),
        )
    )
    return ApiResponse(data=CountRead(count=count or 0))


@router.post("", response_model=ApiResponse[InboxNotificationRead], status_code=status.HTTP_201_CREATED)
async def create_notification(
    payload: InboxNotificationCreate,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    notification = InboxNotification(
        user_id=user_id,
        title=payload.title,
        message=payload.message,
        type=payload.type.value,
        link=payload.link,
        is_read=False,
    )
    session.add(notification)
    await session.commit()
    await session.refresh(notification)
    return ApiResponse(data=InboxNotificationRead.model_validate(notification))


@router.put("/read-all", response_model=ApiResponse[None])
async def mark_all_read(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    result = await session.execute(
        update(InboxNotification)
        .where(InboxNotification.user_id == user_id, InboxNotification.is_read.is_(False))
        .values(is_read=True)
    )
    await session.commit()
    return ApiResponse(message=f"Marked {result.rowcount or 0} notifications as read")


@router.put("/{notification_id}/read", response_model=ApiResponse[InboxNotificationRead])
async def mark_read(
    notification_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    notification = await _get_notification(session, user_id, notification_id)
    notification.is_read = True
    await session.commit()
    await session.refresh(notification)
    return ApiResponse(data=InboxNotificationRead.model_validate(notification))


@router.delete("/read-all", response_model=ApiResponse[None])
async def delete_all_read(
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    result = await session.execute(
        delete(InboxNotification).where(
            InboxNotification.user_id == user_id,
            InboxNotification.is_read.is_(True),
        )
    )
    await session.commit()
    return ApiResponse(message=f"Deleted {result.rowcount or 0} read notifications")


@router.delete("/{notification_id}", response_model=ApiResponse[None])
async def delete_notification(
    notification_id: str,
    user_id: str = Depends(get_user_id),
    session: AsyncSession = Depends(get_session),
) -> ApiResponse:
    notification = await _get_notification(session, user_id, notification_id)
    await session.delete(notification)
    await session.commit()
    return ApiResponse(message="Notification deleted successfully")
