# freeport/routers/profile_router.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Union
from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.models.user import User
from freeport.services.profile_service import ProfileService
from freeport.schemas.base import Envelope, ok
from freeport.schemas.profile_schema import EmployerOut, FreelancerOut, ProfileResolveOut

import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(get_current_user)]
)


@router.get("/me", response_model=Envelope[Optional[Union[FreelancerOut, EmployerOut]]])
async def read_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    取得目前帳號的 Profile；尚未建立時 data 為 null
    """
    profile = await ProfileService(db).get_my_profile(current_user)
    message = "Profile retrieved successfully" if profile else "Profile not created yet"
    return ok(message, profile)


@router.post("/me", response_model=ProfileResolveOut)
async def resolve_my_profile(
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    (重要) 冪等的 find-or-create
    - 已存在：200 + created=false
    - 新建立：201 + created=true
    """
    profile, created = await ProfileService(db).find_or_create_profile(current_user)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return {
        "success": True,
        "message": "Profile created successfully" if created else "Profile retrieved successfully",
        "created": created,
        "data": profile,
    }
