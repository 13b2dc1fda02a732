# freeport/models/skill.py
from sqlalchemy import Column, Integer, String, Enum, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class Skill(Base):
    __tablename__ = "skills"

    skill_id = Column(Integer, primary_key=True, autoincrement=True)
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    skill_name = Column(String(255), nullable=False)
    proficiency_level = Column(String(255))
    years_of_experience = Column(Integer)
    certification = Column(Enum("Yes", "No", name="certification"), default="No")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    freelancer = relationship("Freelancer", back_populates="skills")
