import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.models.user import User
from freeport.services.auth_service import AuthService
from freeport.schemas.base import Envelope, MessageOut, ok
from freeport.schemas.user_schema import CurrentUserOut, TokenOut, UserCreate, UserLogin, UserOut


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",  # 路由前綴
    tags=["Auth"]    # API 文件分類標籤
)


def _token_response(message: str, token: str, user: User) -> dict:
    return {
        "success": True,
        "message": message,
        "token": token,
        "token_type": "bearer",
        "user_info": UserOut.model_validate(user),
    }


# 1. 註冊 API 端點
@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
async def register_new_user(
    user_data: UserCreate,  # Request Body 會被 Pydantic 驗證
    db: AsyncSession = Depends(get_db)
):
    """
    註冊新帳號 (freelancer / employer)，成功後直接回傳 token
    """
    auth_service = AuthService(db)
    new_user = await auth_service.register_user(user_data)
    token = auth_service.create_login_token(new_user)
    return _token_response("User registered successfully", token, new_user)


@router.post("/login", response_model=TokenOut)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """
    Email + 密碼登入，回傳 {token, user_info}
    """
    auth_service = AuthService(db)
    user = await auth_service.authenticate_user(
        email=credentials.email,
        password=credentials.password
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info(f"User logged in: {user.id}")
    token = auth_service.create_login_token(user)
    return _token_response("Login successful", token, user)


@router.get("/user", response_model=Envelope[CurrentUserOut])
async def read_current_user(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """目前登入的帳號 (含 Profile 大頭貼)"""
    info = await AuthService(db).get_user_info(current_user)
    return ok("User retrieved successfully", info)


@router.post("/logout", response_model=MessageOut)
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """登出：撤銷此帳號所有 token"""
    await AuthService(db).logout(current_user)
    return {"success": True, "message": "Logged out successfully"}
