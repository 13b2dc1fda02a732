# freeport/schemas/project_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional
from freeport.schemas.base import UtcDateTime

ProjectStatus = Literal["open", "in_progress", "completed", "closed"]


# 1. 用於在 ProjectOut 中顯示巢狀的雇主資料
class ProjectEmployerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    employer_id: int = Field(..., alias="EmployerID")
    company_name: str = Field(..., alias="CompanyName")
    company_logo: Optional[str] = Field(None, alias="CompanyLogo")


# 2. 基礎欄位 (對應 Model)
class ProjectBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    budget: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=255)
    job_type: Optional[str] = Field(None, max_length=100)
    experience_needed: Optional[str] = Field(None, max_length=255)
    skills_required: List[str] = Field(default_factory=list)


# 3. 雇主刊登案件時的 Request Body (Input)
class ProjectCreate(ProjectBase):
    status: ProjectStatus = "open"


# 4. 雇主更新案件時的 Request Body (所有欄位皆可選)
class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    budget: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=255)
    job_type: Optional[str] = Field(None, max_length=100)
    experience_needed: Optional[str] = Field(None, max_length=255)
    skills_required: Optional[List[str]] = None
    status: Optional[ProjectStatus] = None


# 5. 回傳給前端的案件資料 (Output)
class ProjectOut(ProjectBase):
    id: int
    # (注意) 案件列表的雇主 ID 沿用原本 API 的 PascalCase
    employer_id: int = Field(..., alias="EmployerID")
    skills_required: Optional[List[str]] = None
    interest_count: int = 0
    status: str
    employer: Optional[ProjectEmployerOut] = None
    created_at: Optional[UtcDateTime] = None
    updated_at: Optional[UtcDateTime] = None


# 6. POST /projects/{id}/interest 的回應 (放在 data 內)
class InterestOut(BaseModel):
    project_id: int
    interest_count: int
    # True 表示這位工作者第一次表達興趣
    created: bool
