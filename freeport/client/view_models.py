# freeport/client/view_models.py
# 各資源的標準 View Model：不論 API 回傳 PascalCase 或 snake_case，都轉成同一組欄位
import math
import re
from collections.abc import Mapping
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, computed_field, model_validator,
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

NOT_SPECIFIED = "Not specified"


def snake_case(name: str) -> str:
    """FirstName -> first_name, FreelancerID -> freelancer_id, GPA -> gpa"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def pick(canonical: str, *extra_keys: str, default: Any = None, default_factory=None):
    """
    欄位對應：依序接受 canonical、snake_case(canonical)、extra_keys
    輸出 (by_alias) 一律使用 canonical
    """
    keys = [canonical, snake_case(canonical)]
    keys += [k for k in extra_keys if k not in keys]
    if default_factory is not None:
        return Field(
            default_factory=default_factory,
            validation_alias=AliasChoices(*keys),
            serialization_alias=canonical,
        )
    return Field(default, validation_alias=AliasChoices(*keys), serialization_alias=canonical)


# --- 寬鬆的型別轉換 (API 來的值可能是字串 / 數字 / 缺漏) ---
def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _to_optional_text(value: Any) -> Optional[str]:
    text = _to_text(value)
    return text or None


def _to_int(value: Any) -> int:
    number = to_optional_int(value)
    return 0 if number is None else number


def to_optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    number = _to_number(value)
    return int(number) if number is not None else None


def _to_number(value: Any) -> Optional[float]:
    """數字或數字字串 -> float；空值 / 無法解析 / NaN -> None"""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _splitter(pattern: str):
    separator = re.compile(pattern)

    def split(value: Any) -> List[str]:
        if isinstance(value, str):
            parts = separator.split(value)
        elif isinstance(value, (list, tuple)):
            parts = [_to_text(item) for item in value]
        else:
            return []
        return [part.strip() for part in parts if part and part.strip()]

    return split


def _yes_no(value: Any) -> str:
    return "Yes" if value == "Yes" else "No"


def _object_or_none(value: Any) -> Any:
    """巢狀資料不是物件 (e.g. 空陣列) 時當成沒有資料"""
    return value if isinstance(value, (Mapping, BaseModel)) else None


def _mapping_or_empty(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _objects_only(value: Any) -> List[Any]:
    """巢狀清單只保留物件，其他型別的項目略過"""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


Text = Annotated[str, BeforeValidator(_to_text)]
OptionalText = Annotated[Optional[str], BeforeValidator(_to_optional_text)]
Count = Annotated[int, BeforeValidator(_to_int)]
OptionalInt = Annotated[Optional[int], BeforeValidator(to_optional_int)]
Number = Annotated[Optional[float], BeforeValidator(_to_number)]
# 技術清單：逗號或換行分隔
CommaList = Annotated[List[str], BeforeValidator(_splitter(r"[,\n]"))]
# 招募領域：一行一個
LineList = Annotated[List[str], BeforeValidator(_splitter(r"\r?\n"))]
YesNo = Annotated[Literal["Yes", "No"], BeforeValidator(_yes_no)]
# 巢狀資料：形狀不對就視為沒有
NestedObject = BeforeValidator(_object_or_none)
NestedList = BeforeValidator(_objects_only)
ExtraData = Annotated[Dict[str, Any], BeforeValidator(_mapping_or_empty)]


class ViewModel(BaseModel):
    """
    所有 View Model 的基底
    - 值為 null 的鍵先移除，讓下一個候選鍵或預設值生效
    - 不認得的鍵忽略
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_dict(self) -> Dict[str, Any]:
        """標準鍵名的 dict (巢狀資料也一併轉換)"""
        return self.model_dump(by_alias=True)


class SkillView(ViewModel):
    skill_id: OptionalInt = pick("SkillID")
    freelancer_id: OptionalInt = pick("FreelancerID")
    skill_name: Text = pick("SkillName", default="")
    proficiency_level: Text = pick("ProficiencyLevel", default="Beginner")
    years_of_experience: Count = pick("YearsOfExperience", default=0)
    certification: YesNo = pick("Certification", default="No")


class EducationView(ViewModel):
    education_id: OptionalInt = pick("EducationID")
    freelancer_id: OptionalInt = pick("FreelancerID")
    degree: Text = pick("Degree", default="")
    major: Text = pick("Major", default="")
    institution_name: Text = pick("InstitutionName", default="")
    graduation_year: OptionalInt = pick("GraduationYear")
    gpa: Number = pick("GPA")


class PortfolioView(ViewModel):
    portfolio_id: OptionalInt = pick("PortfolioID")
    freelancer_id: OptionalInt = pick("FreelancerID")
    project_title: Text = pick("ProjectTitle", default="")
    project_description: Text = pick("ProjectDescription", default="")
    technologies_used: CommaList = pick("TechnologiesUsed", default_factory=list)
    completion_date: OptionalText = pick("CompletionDate")
    project_url: OptionalText = pick("ProjectURL")
    project_file: OptionalText = pick("ProjectFile")


class AvailabilityView(ViewModel):
    availability_id: OptionalInt = pick("AvailabilityID")
    freelancer_id: OptionalInt = pick("FreelancerID")
    current_projects_count: Count = pick("CurrentProjectsCount", default=0)
    activity_status: Text = pick("ActivityStatus", default=NOT_SPECIFIED)
    next_availability_date: OptionalText = pick("NextAvailabilityDate")
    weekly_hours_available: OptionalInt = pick("WeeklyHoursAvailable")


class FreelancerView(ViewModel):
    freelancer_id: OptionalInt = pick("FreelancerID", "id")
    first_name: Text = pick("FirstName", default="")
    last_name: Text = pick("LastName", default="")
    email: Text = pick("Email", default="")
    phone_number: Text = pick("PhoneNumber", default="")
    profile_picture: OptionalText = pick("ProfilePicture")
    bio: Text = pick("Bio", default="")
    location: Text = pick("Location", default="")
    account_created_date: OptionalText = pick("AccountCreatedDate")
    skills: Annotated[List[SkillView], NestedList] = pick("Skills", default_factory=list)
    education: Annotated[List[EducationView], NestedList] = pick("Education", default_factory=list)
    portfolio_work: Annotated[List[PortfolioView], NestedList] = pick("PortfolioWork", "portfolioWork", "Portfolio", default_factory=list)
    availability: Annotated[Optional[AvailabilityView], NestedObject] = pick("Availability")

    @computed_field(alias="FullName")
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @computed_field(alias="ActivityStatus")
    @property
    def activity_status(self) -> str:
        # 沒有 availability 時顯示 "Not specified"
        return self.availability.activity_status if self.availability else NOT_SPECIFIED


class EmployerView(ViewModel):
    employer_id: OptionalInt = pick("EmployerID", "id")
    company_name: Text = pick("CompanyName", default="")
    contact_person_name: Text = pick("ContactPersonName", default="")
    email: Text = pick("Email", default="")
    phone_number: Text = pick("PhoneNumber", default="")
    company_logo: OptionalText = pick("CompanyLogo")
    company_website: Text = pick("CompanyWebsite", default="")
    address: Text = pick("Address", default="")
    industry_type: Text = pick("IndustryType", default="")
    company_description: Text = pick("CompanyDescription", default="")
    company_size: Text = pick("CompanySize", default="")
    founded: Text = pick("Founded", default="")
    talent_headline: Text = pick("TalentHeadline", default="")
    talent_areas: LineList = pick("TalentAreas", default_factory=list)
    talent_why_us: Text = pick("TalentWhyUs", default="")


class ProjectView(ViewModel):
    project_id: OptionalInt = pick("ProjectID", "id")
    employer_id: OptionalInt = pick("EmployerID")
    title: Text = pick("Title", default="")
    description: Text = pick("Description", default="")
    budget: Number = pick("Budget")
    duration: Text = pick("Duration", default="")
    job_type: Text = pick("JobType", default="")
    experience_needed: Text = pick("ExperienceNeeded", default="")
    skills_required: CommaList = pick("SkillsRequired", default_factory=list)
    interest_count: Count = pick("InterestCount", default=0)
    status: Text = pick("Status", default="open")
    employer: Annotated[Optional[EmployerView], NestedObject] = pick("Employer")
    created_at: OptionalText = pick("CreatedAt")


class BookmarkView(ViewModel):
    saved_id: OptionalInt = pick("SavedID", "id")
    employer_id: OptionalInt = pick("EmployerID")
    freelancer_id: OptionalInt = pick("FreelancerID")
    saved_date: OptionalText = pick("SavedDate")
    freelancer: Annotated[Optional[FreelancerView], NestedObject] = pick("Freelancer")


class NotificationView(ViewModel):
    notification_id: OptionalInt = pick("NotificationID", "id")
    title: Text = pick("Title", default="")
    message: Text = pick("Message", default="")
    data: ExtraData = pick("Data", default_factory=dict)
    read_at: OptionalText = pick("ReadAt")
    created_at: OptionalText = pick("CreatedAt")

    @computed_field(alias="IsRead")
    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    @property
    def url(self) -> Optional[str]:
        return self.data.get("url")


class AccountView(ViewModel):
    account_id: OptionalInt = pick("AccountID", "id")
    name: Text = pick("Name", default="")
    email: Text = pick("Email", default="")
    user_type: Text = pick("UserType", "userType", "role", default="")
    avatar: OptionalText = pick("Avatar", "profile_picture")
