# freeport/services/notification_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

from freeport.models.user import User
from freeport.models.notification import Notification
from freeport.repositories.notification_repo import NotificationRepository

import logging

logger = logging.getLogger(__name__)

class NotificationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = NotificationRepository(db)

    async def create_notification(
        self,
        user_id: int,
        title: str,
        message: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """
        (內部使用) 供其他 Service 呼叫的介面
        """
        new_notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            data=data or {},
        )
        logger.info(f"建立通知 for User ID: {user_id}, Title: {title}")
        return await self.repo.create_notification(new_notification)

    async def get_my_notifications(self, user: User) -> List[Notification]:
        """
        (API 用) 獲取當前登入者的通知列表
        """
        return await self.repo.list_notifications_by_user(user.id)

    async def mark_notification_as_read(
        self,
        notification_id: int,
        user: User
    ) -> Notification:
        """
        (API 用) 將通知設為已讀
        """
        # (重要) 只查詢自己的通知；別人的通知視同不存在
        notification = await self.repo.get_user_notification(notification_id, user.id)

        if not notification:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Notification not found")

        if notification.read_at is not None:
            return notification # 已讀，直接回傳 (不覆蓋 read_at)

        return await self.repo.mark_as_read(notification)

    async def mark_all_as_read(self, user: User) -> int:
        updated = await self.repo.mark_all_as_read(user.id)
        logger.info(f"Marked {updated} notifications as read for user {user.id}")
        return updated
