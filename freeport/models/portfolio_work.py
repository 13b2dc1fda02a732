# freeport/models/portfolio_work.py
from sqlalchemy import Column, Integer, String, TEXT, Date, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from freeport.core.database import Base
from freeport.models.user import utcnow


class PortfolioWork(Base):
    __tablename__ = "portfolio_work"

    portfolio_id = Column(Integer, primary_key=True, autoincrement=True)
    freelancer_id = Column(
        Integer, ForeignKey("freelancers.freelancer_id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_title = Column(String(255), nullable=False)
    project_description = Column(TEXT)
    # 以逗號分隔的技術清單 (e.g. "React, Laravel")
    technologies_used = Column(TEXT)
    completion_date = Column(Date)
    project_url = Column(String(255))
    project_file = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    freelancer = relationship("Freelancer", back_populates="portfolio_work")
