# freeport/routers/freelancer_router.py
import logging
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal, Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.freelancer_service import FreelancerService
from freeport.services.child_resource_service import portfolio_service, skill_service
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.profile_schema import FreelancerCreate, FreelancerOut, FreelancerUpdate
from freeport.schemas.portfolio_schema import PortfolioWorkOut
from freeport.schemas.skill_schema import SkillOut

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/freelancers",
    tags=["Freelancers"],
)

# (重要) 瀏覽 (列表 / 詳情 / 技能 / 作品集) 不需登入，其餘都需要
requires_login = [Depends(get_current_user)]


@router.get("", response_model=ListEnvelope[FreelancerOut])
async def list_freelancers(
    db: AsyncSession = Depends(get_db),
    # search: 名字 / email / 自介 / 技能 模糊搜尋
    search: Optional[str] = None,
    location: Optional[str] = None,
    sort_by: Optional[Literal["newest"]] = None,
):
    """搜尋 / 篩選工作者"""
    freelancers = await FreelancerService(db).search_freelancers(
        search=search, location=location, sort_by=sort_by
    )
    return ok_list("Freelancers retrieved successfully", freelancers)


@router.post(
    "",
    response_model=Envelope[FreelancerOut],
    status_code=status.HTTP_201_CREATED,
    dependencies=requires_login,
)
async def create_freelancer(
    data: FreelancerCreate,
    db: AsyncSession = Depends(get_db)
):
    freelancer = await FreelancerService(db).create_freelancer(data)
    return ok("Freelancer created successfully", freelancer)


@router.get("/{freelancer_id}", response_model=Envelope[FreelancerOut])
async def get_freelancer(freelancer_id: int, db: AsyncSession = Depends(get_db)):
    """工作者詳情 (含技能、學歷、作品集、可接案狀態)"""
    freelancer = await FreelancerService(db).get_freelancer(freelancer_id)
    return ok("Freelancer retrieved successfully", freelancer)


@router.put(
    "/{freelancer_id}",
    response_model=Envelope[FreelancerOut],
    dependencies=requires_login,
)
async def update_freelancer(
    freelancer_id: int,
    data: FreelancerUpdate,
    db: AsyncSession = Depends(get_db)
):
    freelancer = await FreelancerService(db).update_freelancer(freelancer_id, data)
    return ok("Freelancer updated successfully", freelancer)


@router.delete("/{freelancer_id}", response_model=MessageOut, dependencies=requires_login)
async def delete_freelancer(freelancer_id: int, db: AsyncSession = Depends(get_db)):
    await FreelancerService(db).delete_freelancer(freelancer_id)
    return {"success": True, "message": "Freelancer deleted successfully"}


@router.get("/{freelancer_id}/skills", response_model=ListEnvelope[SkillOut])
async def list_freelancer_skills(freelancer_id: int, db: AsyncSession = Depends(get_db)):
    await FreelancerService(db).get_freelancer(freelancer_id)
    skills = await skill_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Skills retrieved successfully", skills)


@router.get("/{freelancer_id}/portfolio", response_model=ListEnvelope[PortfolioWorkOut])
async def list_freelancer_portfolio(freelancer_id: int, db: AsyncSession = Depends(get_db)):
    await FreelancerService(db).get_freelancer(freelancer_id)
    works = await portfolio_service(db).list_records(freelancer_id=freelancer_id)
    return ok_list("Portfolio retrieved successfully", works)


@router.post(
    "/{freelancer_id}/profile-picture",
    response_model=Envelope[FreelancerOut],
    dependencies=requires_login,
)
async def upload_profile_picture(
    freelancer_id: int,
    profile_picture: UploadFile = File(...),
    db: AsyncSession = Depends(get_db)
):
    """
    上傳大頭貼 (multipart/form-data, 欄位名稱 profile_picture)
    回傳的 ProfilePicture 為 storage 相對路徑
    """
    freelancer = await FreelancerService(db).upload_profile_picture(freelancer_id, profile_picture)
    return ok("Profile picture uploaded successfully", freelancer)
