# freeport/routers/employer_router.py
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.services.employer_service import EmployerService
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.bookmark_schema import BookmarkWithFreelancerOut
from freeport.schemas.profile_schema import EmployerCreate, EmployerOut, EmployerUpdate

router = APIRouter(
    prefix="/employers",
    tags=["Employers"],
)

# (重要) 瀏覽 (列表 / 詳情) 不需登入，其餘都需要
requires_login = [Depends(get_current_user)]


@router.get("", response_model=ListEnvelope[EmployerOut])
async def list_employers(
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = None,
    industry: Optional[str] = None,
    location: Optional[str] = None,
):
    """搜尋 / 篩選雇主"""
    employers = await EmployerService(db).search_employers(
        search=search, industry=industry, location=location
    )
    return ok_list("Employers retrieved successfully", employers)


@router.post(
    "",
    response_model=Envelope[EmployerOut],
    status_code=status.HTTP_201_CREATED,
    dependencies=requires_login,
)
async def create_employer(data: EmployerCreate, db: AsyncSession = Depends(get_db)):
    employer = await EmployerService(db).create_employer(data)
    return ok("Employer created successfully", employer)


@router.get("/{employer_id}", response_model=Envelope[EmployerOut])
async def get_employer(employer_id: int, db: AsyncSession = Depends(get_db)):
    employer = await EmployerService(db).get_employer(employer_id)
    return ok("Employer retrieved successfully", employer)


@router.put("/{employer_id}", response_model=Envelope[EmployerOut], dependencies=requires_login)
async def update_employer(employer_id: int, data: EmployerUpdate, db: AsyncSession = Depends(get_db)):
    employer = await EmployerService(db).update_employer(employer_id, data)
    return ok("Employer updated successfully", employer)


@router.delete("/{employer_id}", response_model=MessageOut, dependencies=requires_login)
async def delete_employer(employer_id: int, db: AsyncSession = Depends(get_db)):
    await EmployerService(db).delete_employer(employer_id)
    return {"success": True, "message": "Employer deleted successfully"}


@router.get(
    "/{employer_id}/bookmarks",
    response_model=ListEnvelope[BookmarkWithFreelancerOut],
    dependencies=requires_login,
)
async def list_employer_bookmarks(employer_id: int, db: AsyncSession = Depends(get_db)):
    """雇主收藏的工作者，附上工作者資料 (最新收藏在前)"""
    bookmarks = await EmployerService(db).list_bookmarks(employer_id)
    return ok_list("Bookmarks retrieved successfully", bookmarks)


@router.post(
    "/{employer_id}/company-logo",
    response_model=Envelope[EmployerOut],
    dependencies=requires_login,
)
async def upload_company_logo(
    employer_id: int,
    company_logo: UploadFile = File(...),
    db: AsyncSession = Depends(get_db)
):
    """上傳公司 Logo (multipart/form-data, 欄位名稱 company_logo)"""
    employer = await EmployerService(db).upload_company_logo(employer_id, company_logo)
    return ok("Company logo uploaded successfully", employer)
