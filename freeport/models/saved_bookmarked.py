# freeport/models/saved_bookmarked.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class SavedBookmarked(Base):
    __tablename__ = "saved_bookmarked"
    # (重要) 同一位雇主對同一位工作者只會有一筆收藏
    __table_args__ = (
        UniqueConstraint("employer_id", "freelancer_id", name="uq_saved_bookmarked_pair"),
    )

    saved_id = Column(Integer, primary_key=True, autoincrement=True)
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    employer_id = Column(
        Integer, ForeignKey("employers.employer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    saved_date = Column(DateTime(timezone=True), default=utcnow)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # 收藏列表需要顯示工作者資料，一併載入
    freelancer = relationship("Freelancer", back_populates="saved_by", lazy="selectin")
    employer = relationship("Employer", back_populates="saved_freelancers", lazy="selectin")
