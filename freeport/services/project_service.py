# freeport/services/project_service.py
import logging
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

# 匯入 Models
from freeport.models.user import User, UserTypeEnum
from freeport.models.project import ProjectListing

# 匯入 Schemas
from freeport.schemas.project_schema import ProjectCreate, ProjectUpdate

# 匯入 Repositories / Services
from freeport.repositories.project_repo import ProjectRepository
from freeport.repositories.user_repo import UserRepository
from freeport.services.notification_service import NotificationService
from freeport.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.project_repo = ProjectRepository(db)
        self.profile_service = ProfileService(db)
        self.notification_service = NotificationService(db)  # 用於發送通知

    async def _get_employer_id(self, user: User) -> int:
        """目前帳號對應的雇主 Profile ID (非雇主 -> 403)"""
        if user.user_type != UserTypeEnum.employer:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only employers can manage projects")
        employer, _ = await self.profile_service.find_or_create_profile(user)
        return employer.employer_id

    # 輔助函式：檢查權限
    async def _get_and_check_permission(self, project_id: int, user: User) -> ProjectListing:
        """
        獲取案件，並檢查是否為擁有者
        """
        project = await self.get_project_details(project_id)
        employer_id = await self._get_employer_id(user)
        if project.employer_id != employer_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "You do not own this project")
        return project

    async def search_projects(
        self, status_filter: Optional[str] = None, employer_id: Optional[int] = None
    ) -> List[ProjectListing]:
        return await self.project_repo.list_projects(status=status_filter, employer_id=employer_id)

    async def get_project_details(self, project_id: int) -> ProjectListing:
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Project not found")
        return project

    async def create_project(self, project_data: ProjectCreate, user: User) -> ProjectListing:
        """
        業務邏輯：建立案件 (僅限雇主)
        """
        employer_id = await self._get_employer_id(user)
        project = ProjectListing(**project_data.model_dump(), employer_id=employer_id)
        created = await self.project_repo.create_project(project)
        logger.info(f"Project {created.id} created by employer {employer_id}")
        return created

    async def update_project(self, project_id: int, data: ProjectUpdate, user: User) -> ProjectListing:
        project = await self._get_and_check_permission(project_id, user)
        return await self.project_repo.update_project(project, data.model_dump(exclude_unset=True))

    async def delete_project(self, project_id: int, user: User) -> None:
        await self._get_and_check_permission(project_id, user)
        await self.project_repo.delete_project(project_id)
        logger.info(f"Project {project_id} deleted")

    async def express_interest(self, project_id: int, user: User) -> Tuple[int, bool]:
        """
        (核心功能) 工作者對案件表達興趣
        1. 僅限工作者帳號
        2. 每位工作者對同一案件只算一次 (interest_count 只會遞增)
        3. 第一次表達興趣時通知雇主
        回傳 (最新 interest_count, created)
        """
        if user.user_type != UserTypeEnum.freelancer:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Only freelancers can express interest")

        project = await self.get_project_details(project_id)
        freelancer, _ = await self.profile_service.find_or_create_profile(user)

        # (注意) add_interest 可能 rollback，先取出之後需要的值
        freelancer_id = freelancer.freelancer_id
        freelancer_name = f"{freelancer.first_name} {freelancer.last_name}".strip()
        project_title = project.title
        employer_email = project.employer.email if project.employer else None

        created = await self.project_repo.add_interest(project_id, freelancer_id)

        if created and employer_email:
            employer_user = await UserRepository(self.db).get_user_by_email(employer_email)
            if employer_user is not None:
                await self.notification_service.create_notification(
                    user_id=employer_user.id,
                    title="New interest in your project",
                    message=f'{freelancer_name} is interested in "{project_title}"',
                    data={
                        "url": f"/freelancers/{freelancer_id}",
                        "project_id": project_id,
                        "freelancer_id": freelancer_id,
                    },
                )

        refreshed = await self.project_repo.get_project_by_id(project_id, refresh=True)
        return refreshed.interest_count, created
