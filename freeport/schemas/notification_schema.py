# freeport/schemas/notification_schema.py

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from freeport.schemas.base import UtcDateTime

class NotificationOut(BaseModel):
    """
    用於 API 回傳的通知格式
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    read_at: Optional[UtcDateTime] = None
    created_at: UtcDateTime


class MarkAllReadOut(BaseModel):
    success: bool = True
    message: str
    updated: int
