# models/project.py
from sqlalchemy import Column, Integer, String, TEXT, Numeric, JSON, Enum, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow

PROJECT_STATUSES = ("open", "in_progress", "completed", "closed")


class ProjectListing(Base):
    # 告訴 SQLAlchemy，這個類別對應到資料庫中名為 project_listings 的表格 (table)
    __tablename__ = "project_listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(
        Integer, ForeignKey("employers.employer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(TEXT, nullable=False)
    budget = Column(Numeric(10, 2, asdecimal=False))
    duration = Column(String(255))
    job_type = Column(String(100))
    experience_needed = Column(String(255))
    skills_required = Column(JSON)
    # (重要) 只會遞增，見 ProjectRepository.increment_interest
    interest_count = Column(Integer, nullable=False, default=0)
    status = Column(Enum(*PROJECT_STATUSES, name="project_status"), nullable=False, default="open")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # 列表與詳情都會顯示雇主資料
    employer = relationship("Employer", back_populates="projects", lazy="selectin")

    interests = relationship(
        "ProjectInterest",
        back_populates="project",
        cascade="all, delete-orphan",
    )


class ProjectInterest(Base):
    __tablename__ = "project_interests"
    # (重要) 同一位工作者對同一個案件只記錄一次
    __table_args__ = (
        UniqueConstraint("project_listing_id", "freelancer_id", name="uq_project_interest"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_listing_id = Column(
        Integer, ForeignKey("project_listings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)

    project = relationship("ProjectListing", back_populates="interests")
