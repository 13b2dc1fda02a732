# freeport/routers/project_router.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

# 匯入核心依賴
from freeport.core.database import get_db
from freeport.core.security import get_current_user
from freeport.models.user import User

# 匯入 Service 和 Schemas
from freeport.services.project_service import ProjectService
from freeport.schemas.base import Envelope, ListEnvelope, MessageOut, ok, ok_list
from freeport.schemas.project_schema import (
    InterestOut, ProjectCreate, ProjectOut, ProjectStatus, ProjectUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
)

# (重要) 瀏覽案件不需登入；新增 / 修改 / 刪除 / 表達興趣 透過 current_user 要求登入


@router.get("", response_model=ListEnvelope[ProjectOut])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    employer_id: Optional[int] = None,
):
    """
    案件列表 (最新的在前)，可依狀態與雇主篩選
    """
    logger.info(f"Listing projects - status: {status_filter}, employer_id: {employer_id}")
    projects = await ProjectService(db).search_projects(status_filter=status_filter, employer_id=employer_id)
    return ok_list("Projects retrieved successfully", projects)


@router.post("", response_model=Envelope[ProjectOut], status_code=status.HTTP_201_CREATED)
async def create_new_project(
    project_data: ProjectCreate,  # Request Body
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    刊登新案件。

    - (權限) 僅限雇主帳號，案件歸屬於該帳號的雇主 Profile。
    """
    project = await ProjectService(db).create_project(project_data=project_data, user=current_user)
    return ok("Project created successfully", project)


# 拿到特定的案件詳情
@router.get("/{project_id}", response_model=Envelope[ProjectOut])
async def get_project_by_id(project_id: int, db: AsyncSession = Depends(get_db)):
    project = await ProjectService(db).get_project_details(project_id)
    return ok("Project retrieved successfully", project)


@router.put("/{project_id}", response_model=Envelope[ProjectOut])
async def update_project_details(
    project_id: int,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    (雇主) 更新自己刊登的案件 (含狀態)。
    """
    project = await ProjectService(db).update_project(project_id=project_id, data=project_data, user=current_user)
    return ok("Project updated successfully", project)


@router.delete("/{project_id}", response_model=MessageOut)
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    await ProjectService(db).delete_project(project_id=project_id, user=current_user)
    return {"success": True, "message": "Project deleted successfully"}


@router.post("/{project_id}/interest", response_model=Envelope[InterestOut])
async def express_interest(
    project_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    (工作者) 對案件表達興趣，回傳最新的 interest_count。
    同一位工作者重複呼叫不會再遞增。
    """
    count, created = await ProjectService(db).express_interest(project_id=project_id, user=current_user)
    message = "Interest recorded" if created else "Interest already recorded"
    return ok(message, {"project_id": project_id, "interest_count": count, "created": created})
