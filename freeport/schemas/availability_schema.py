# freeport/schemas/availability_schema.py
from pydantic import Field
from datetime import date
from typing import Optional
from freeport.schemas.base import ApiSchema, UtcDateTime


class AvailabilityBase(ApiSchema):
    current_projects_count: int = Field(0, ge=0)
    activity_status: str = Field("Active", min_length=1, max_length=255)
    next_availability_date: Optional[date] = None
    # 一週最多 168 小時
    weekly_hours_available: Optional[int] = Field(None, ge=0, le=168)


class AvailabilityCreate(AvailabilityBase):
    freelancer_id: int


class AvailabilityUpdate(ApiSchema):
    current_projects_count: Optional[int] = Field(None, ge=0)
    activity_status: Optional[str] = Field(None, min_length=1, max_length=255)
    next_availability_date: Optional[date] = None
    weekly_hours_available: Optional[int] = Field(None, ge=0, le=168)


class AvailabilityOut(AvailabilityBase):
    availability_id: int
    freelancer_id: int
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")
