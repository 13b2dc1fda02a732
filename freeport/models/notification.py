# freeport/models/notification.py

from sqlalchemy import Column, Integer, String, TEXT, JSON, ForeignKey, DateTime
from freeport.core.database import Base
from freeport.models.user import utcnow

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # (重要) 關聯到接收通知的帳號 (不是 Profile)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    message = Column(TEXT)

    # (關鍵) 附加資料，例如點擊通知後要導向的前端 URL: {"url": "/freelancers/3", ...}
    data = Column(JSON)

    # null = 未讀；設定後不會再清除
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
