# freeport/schemas/profile_schema.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional, Union
from freeport.schemas.base import ApiSchema, UtcDateTime
from freeport.schemas.skill_schema import SkillOut
from freeport.schemas.education_schema import EducationOut
from freeport.schemas.portfolio_schema import PortfolioWorkOut
from freeport.schemas.availability_schema import AvailabilityOut
from freeport.utils.text import strip_tags

import re

_NAME_PATTERN = re.compile(r"^[A-Za-z\s]*$")


# --- 自由工作者 (Freelancer) ---
class FreelancerBase(ApiSchema):
    phone_number: Optional[str] = Field(None, max_length=20)
    profile_picture: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=255)


class FreelancerCreate(FreelancerBase):
    first_name: str = Field(..., min_length=1, max_length=255)  # 建立時名字必填
    last_name: str = Field("", max_length=255)
    email: EmailStr

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """姓名只允許英文字母與空白"""
        if not _NAME_PATTERN.match(v):
            raise ValueError("Name may only contain letters and spaces")
        return v.strip()

    @field_validator("phone_number", "profile_picture", "bio", "location")
    @classmethod
    def sanitize(cls, v: Optional[str]) -> Optional[str]:
        return strip_tags(v) if v else v


class FreelancerUpdate(FreelancerBase):
    # 更新時全為選填
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None


class FreelancerOut(FreelancerBase):
    freelancer_id: int
    first_name: str
    last_name: str = ""
    email: str
    account_created_date: Optional[UtcDateTime] = None

    # (重要) 巢狀回傳子資料；巢狀關聯沿用 snake_case 鍵名
    skills: List[SkillOut] = Field(default_factory=list, alias="skills")
    education: List[EducationOut] = Field(default_factory=list, alias="education")
    portfolio_work: List[PortfolioWorkOut] = Field(default_factory=list, alias="portfolio_work")
    availability: Optional[AvailabilityOut] = Field(None, alias="availability")

    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")


# --- 雇主 (Employer) ---
class EmployerBase(ApiSchema):
    phone_number: Optional[str] = Field(None, max_length=50)
    company_logo: Optional[str] = Field(None, max_length=500)
    company_website: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    industry_type: Optional[str] = Field(None, max_length=255)
    company_description: Optional[str] = None
    company_size: Optional[str] = Field(None, max_length=255)
    founded: Optional[str] = Field(None, max_length=255)
    talent_headline: Optional[str] = Field(None, max_length=255)
    talent_areas: Optional[str] = None
    talent_why_us: Optional[str] = None


class EmployerCreate(EmployerBase):
    company_name: str = Field(..., min_length=1, max_length=255)  # 建立時公司名必填
    contact_person_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class EmployerUpdate(EmployerBase):
    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_person_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class EmployerOut(EmployerBase):
    employer_id: int
    company_name: str
    contact_person_name: str
    email: str
    created_at: Optional[UtcDateTime] = Field(None, alias="created_at")
    updated_at: Optional[UtcDateTime] = Field(None, alias="updated_at")


# --- /profiles/me (find-or-create) ---
class ProfileResolveOut(BaseModel):
    success: bool = True
    message: str
    # True 表示這次呼叫新建了 Profile
    created: bool
    data: Union[FreelancerOut, EmployerOut]
