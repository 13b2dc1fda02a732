# freeport/schemas/portfolio_schema.py
from pydantic import Field
from datetime import date
from typing import Optional
from freeport.schemas.base import ApiSchema, UtcDateTime


class PortfolioWorkBase(ApiSchema):
    project_title: str = Field(..., min_length=1, max_length=255)
    project_description: Optional[str] = None
    # 以逗號分隔 (e.g. "React, FastAPI")
    technologies_used: Optional[str] = None
    completion_date: Optional[date] = None
    project_url: Optional[str] = Field(None, max_length=255)
    project_file: Optional[str] = Field(None, max_length=255)


class PortfolioWorkCreate(PortfolioWorkBase):
    freelancer_id: int


class PortfolioWorkUpdate(ApiSchema):
    project_title: Optional[str] = Field(None, min_length=1, max_length=255)
    project_description: Optional[str] = None
    technologies_used: Optional[str] = None
    completion_date: Optional[date] = None
    project_url: Optional[str] = Field(None, max_length=255)
    project_file: Optional[str] = Field(None, max_length=255)


class PortfolioWorkOut(PortfolioWorkBase):
    portfolio_id: int
    freelancer_id: int
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")
