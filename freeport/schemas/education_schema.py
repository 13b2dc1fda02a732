# freeport/schemas/education_schema.py
from pydantic import Field
from typing import Optional
from freeport.schemas.base import ApiSchema, UtcDateTime


class EducationBase(ApiSchema):
    degree: str = Field(..., min_length=1, max_length=255)
    major: str = Field(..., min_length=1, max_length=255)
    institution_name: str = Field(..., min_length=1, max_length=255)
    graduation_year: int = Field(..., ge=1900, le=2100)
    gpa: Optional[float] = Field(None, ge=0, le=4)


class EducationCreate(EducationBase):
    freelancer_id: int


class EducationUpdate(ApiSchema):
    degree: Optional[str] = Field(None, min_length=1, max_length=255)
    major: Optional[str] = Field(None, min_length=1, max_length=255)
    institution_name: Optional[str] = Field(None, min_length=1, max_length=255)
    graduation_year: Optional[int] = Field(None, ge=1900, le=2100)
    gpa: Optional[float] = Field(None, ge=0, le=4)


class EducationOut(EducationBase):
    education_id: int
    freelancer_id: int
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")
