# freeport/schemas/skill_schema.py
from pydantic import Field
from typing import Literal, Optional
from freeport.schemas.base import ApiSchema, UtcDateTime


class SkillBase(ApiSchema):
    skill_name: str = Field(..., min_length=1, max_length=255)
    proficiency_level: Optional[str] = Field(None, max_length=255)
    years_of_experience: Optional[int] = Field(None, ge=0)
    certification: Optional[Literal["Yes", "No"]] = None


class SkillCreate(SkillBase):
    freelancer_id: int


class SkillUpdate(ApiSchema):
    # 更新時全為選填
    skill_name: Optional[str] = Field(None, min_length=1, max_length=255)
    proficiency_level: Optional[str] = Field(None, max_length=255)
    years_of_experience: Optional[int] = Field(None, ge=0)
    certification: Optional[Literal["Yes", "No"]] = None


class SkillOut(SkillBase):
    skill_id: int
    freelancer_id: int
    certification: Optional[str] = None
    # (注意) 時間戳記沿用 snake_case 鍵名
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")
