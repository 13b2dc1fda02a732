# models/user.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Enum, DateTime
from freeport.core.database import Base
import enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# 帳號角色 (對應 API 的 user_type)
class UserTypeEnum(str, enum.Enum):
    freelancer = "freelancer"
    employer = "employer"


class User(Base):
    __tablename__ = "users"

    # 基本欄位
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    user_type = Column(
        Enum(UserTypeEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=UserTypeEnum.freelancer,
    )

    # (重要) 登出時遞增，讓所有已發出的 token 失效
    token_version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
