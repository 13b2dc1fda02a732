# freeport/routers/notification_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freeport.core.database import get_db
from freeport.models.user import User
from freeport.core.security import get_current_user
from freeport.services.notification_service import NotificationService
from freeport.schemas.base import Envelope, ListEnvelope, ok, ok_list
from freeport.schemas.notification_schema import MarkAllReadOut, NotificationOut

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"]
)

@router.get(
    "",
    response_model=ListEnvelope[NotificationOut],
    summary="獲取我的通知列表"
)
async def get_my_notifications(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入者的通知列表 (依時間倒序)。
    前端應使用此 API 定期輪詢 (Polling)。
    """
    notifications = await NotificationService(db).get_my_notifications(current_user)
    return ok_list("Notifications retrieved successfully", notifications)

@router.post(
    "/read-all",
    response_model=MarkAllReadOut,
    summary="全部設為已讀"
)
async def mark_all_as_read(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    updated = await NotificationService(db).mark_all_as_read(current_user)
    return {"success": True, "message": "All notifications marked as read", "updated": updated}

@router.post(
    "/{notification_id}/read",
    response_model=Envelope[NotificationOut],
    summary="將通知設為已讀"
)
async def mark_as_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    當使用者點擊通知時，前端應呼叫此 API 將其標記為已讀。
    已讀的通知再次呼叫不會改變 read_at。
    """
    notification = await NotificationService(db).mark_notification_as_read(notification_id, current_user)
    return ok("Notification marked as read", notification)
