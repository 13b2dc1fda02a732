# freeport/repositories/notification_repo.py

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import List, Optional
import logging

from freeport.models.notification import Notification
from freeport.models.user import utcnow

logger = logging.getLogger(__name__)

class NotificationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_notification(self, notification: Notification) -> Notification:
        """
        新增一筆通知
        """
        try:
            self.db.add(notification)
            await self.db.commit()
            return notification
        except Exception as e:
            await self.db.rollback()
            logger.error(f"建立通知失敗: {e}", exc_info=True)
            raise

    async def get_user_notification(self, notification_id: int, user_id: int) -> Optional[Notification]:
        """
        依 ID 獲取通知 (只查詢該使用者自己的通知)
        """
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_notifications_by_user(self, user_id: int, limit: int = 50) -> List[Notification]:
        """
        獲取某位使用者的所有通知 (依時間降序排列)
        """
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def mark_as_read(self, notification: Notification) -> Notification:
        """
        將單一通知設為已讀 (read_at 設定後不會再被清除)
        """
        notification.read_at = utcnow()
        await self.db.commit()
        return notification

    async def mark_all_as_read(self, user_id: int) -> int:
        """
        將使用者所有未讀通知設為已讀，回傳更新筆數
        """
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.read_at.is_(None))
            .values(read_at=utcnow())
        )
        result = await self.db.execute(stmt)
        await self.db.commit()
        return result.rowcount
