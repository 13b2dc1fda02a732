# freeport/schemas/user_schema.py
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator, ConfigDict
from freeport.models.user import UserTypeEnum
from typing import Optional


# 1. 註冊請求 Body
class UserCreate(BaseModel):
    name: str = Field(..., min_length=4, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    # (可選) 有傳就必須與 password 相同
    password_confirmation: Optional[str] = None
    user_type: UserTypeEnum = UserTypeEnum.freelancer

    @field_validator("password_confirmation")
    @classmethod
    def check_passwords_match(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is not None and v != info.data.get("password"):
            raise ValueError("The password confirmation does not match.")
        return v


# 登入請求的格式
class UserLogin(BaseModel):
    email: EmailStr
    password: str


# (可選) Token 內的資料
class TokenData(BaseModel):
    user_id: int
    user_type: str
    ver: int = 0


# 2. 回傳給前端的帳號資料 (不含密碼)
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    user_type: UserTypeEnum


# GET /auth/user 額外附上 Profile 的大頭貼
class CurrentUserOut(UserOut):
    avatar: Optional[str] = None
    profile_picture: Optional[str] = None


# 登入 / 註冊成功的回應 {token, user_info}
class TokenOut(BaseModel):
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user_info: UserOut
