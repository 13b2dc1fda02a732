# freeport/models/employer_profile.py
from sqlalchemy import Column, Integer, String, TEXT, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class Employer(Base):
    __tablename__ = "employers"

    employer_id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(255), nullable=False)
    contact_person_name = Column(String(255), nullable=False)
    # (重要) Email 唯一：同一帳號只會有一份雇主 Profile
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone_number = Column(String(50))
    company_logo = Column(String(500))
    company_website = Column(String(255))
    address = Column(TEXT)
    industry_type = Column(String(255))
    company_description = Column(TEXT)
    company_size = Column(String(255))
    founded = Column(String(255))
    talent_headline = Column(String(255))
    # 多行文字，每行一個招募領域 ("職稱: 說明")
    talent_areas = Column(TEXT)
    talent_why_us = Column(TEXT)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    saved_freelancers = relationship(
        "SavedBookmarked",
        back_populates="employer",
        cascade="all, delete-orphan",
    )
    projects = relationship(
        "ProjectListing",
        back_populates="employer",
        cascade="all, delete-orphan",
    )
