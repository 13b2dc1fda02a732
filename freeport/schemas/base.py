# freeport/schemas/base.py
# 共用 Schema：API 欄位命名 (PascalCase) 與回應封包 {success, message, data}
from pydantic import AfterValidator, BaseModel, ConfigDict
from datetime import datetime, timezone
from typing import Annotated, Generic, List, Optional, TypeVar

T = TypeVar("T")


def as_utc(value: datetime) -> datetime:
    """
    SQLite 讀回的時間沒有時區；一律視為 UTC
    讓同一筆資料不論剛寫入或重新讀取，輸出格式都相同
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]

# 需整段大寫的縮寫 (FreelancerID, ProjectURL, GPA)
_ACRONYMS = {"id": "ID", "url": "URL", "gpa": "GPA"}


def to_api_name(field_name: str) -> str:
    """
    snake_case -> API 使用的 PascalCase
    e.g. first_name -> FirstName, freelancer_id -> FreelancerID
    """
    return "".join(_ACRONYMS.get(part, part.capitalize()) for part in field_name.split("_"))


class ApiSchema(BaseModel):
    """
    資源型 Schema 的基底 (Freelancer, Skill, ...)
    - 輸出時使用 PascalCase 鍵名
    - 輸入時兩種命名都接受 (FirstName / first_name)
    """
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_api_name,
    )


class Envelope(BaseModel, Generic[T]):
    """所有 API 回應的外層封包"""
    success: bool = True
    message: str = ""
    data: Optional[T] = None


class ListEnvelope(BaseModel, Generic[T]):
    """列表型回應，額外回傳筆數"""
    success: bool = True
    message: str = ""
    data: List[T] = []
    count: int = 0


class MessageOut(BaseModel):
    """沒有 data 的回應 (e.g. 刪除成功)"""
    success: bool = True
    message: str


def ok(message: str, data=None) -> dict:
    return {"success": True, "message": message, "data": data}


def ok_list(message: str, items) -> dict:
    items = list(items)
    return {"success": True, "message": message, "data": items, "count": len(items)}
