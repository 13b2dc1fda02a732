# freeport/models/freelancer_profile.py
from sqlalchemy import Column, Integer, String, TEXT, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class Freelancer(Base):
    __tablename__ = "freelancers"

    freelancer_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False, default="")
    # (重要) Email 唯一：同一帳號只會有一份工作者 Profile
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone_number = Column(String(20))
    profile_picture = Column(String(500))
    bio = Column(TEXT)
    location = Column(String(255))
    account_created_date = Column(DateTime(timezone=True), default=utcnow)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # 子資料 (lazy="selectin" 讓查詢 Freelancer 時一併載入)
    skills = relationship(
        "Skill",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    education = relationship(
        "Education",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    portfolio_work = relationship(
        "PortfolioWork",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    # 一對一：每位工作者最多一筆 availability
    availability = relationship(
        "Availability",
        back_populates="freelancer",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )
    saved_by = relationship(
        "SavedBookmarked",
        back_populates="freelancer",
        cascade="all, delete-orphan",
    )
