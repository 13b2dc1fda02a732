# freeport/models/availability.py
from sqlalchemy import Column, Integer, String, Date, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class Availability(Base):
    __tablename__ = "availability"

    availability_id = Column(Integer, primary_key=True, autoincrement=True)
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    current_projects_count = Column(Integer, nullable=False, default=0)
    activity_status = Column(String(255), nullable=False, default="Active")
    next_availability_date = Column(Date)
    weekly_hours_available = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    freelancer = relationship("Freelancer", back_populates="availability")
