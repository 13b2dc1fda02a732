# freeport/models/education.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class Education(Base):
    __tablename__ = "education"

    education_id = Column(Integer, primary_key=True, autoincrement=True)
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    degree = Column(String(255), nullable=False)
    major = Column(String(255), nullable=False)
    institution_name = Column(String(255), nullable=False)
    graduation_year = Column(Integer, nullable=False)
    # 0.00 ~ 4.00
    gpa = Column(Numeric(3, 2, asdecimal=False))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    freelancer = relationship("Freelancer", back_populates="education")
