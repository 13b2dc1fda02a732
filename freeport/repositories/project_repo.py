# freeport/repositories/project_repo.py
import logging
from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from freeport.models.project import ProjectListing, ProjectInterest

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # 獲取單一案件 (employer 由 lazy="selectin" 一併載入)
    async def get_project_by_id(self, project_id: int, refresh: bool = False) -> ProjectListing | None:
        stmt = select(ProjectListing).where(ProjectListing.id == project_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    # 條件搜尋案件
    async def list_projects(
        self,
        status: Optional[str] = None,
        employer_id: Optional[int] = None,
    ) -> List[ProjectListing]:
        """
        依條件列出案件，最新的在前
        1. status: 精確比對
        2. employer_id: 只看某位雇主的案件
        """
        stmt = select(ProjectListing)
        if status:
            stmt = stmt.where(ProjectListing.status == status)
        if employer_id is not None:
            stmt = stmt.where(ProjectListing.employer_id == employer_id)

        stmt = stmt.order_by(ProjectListing.created_at.desc(), ProjectListing.id.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_project(self, project: ProjectListing) -> ProjectListing:
        try:
            self.db.add(project)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"建立案件失敗: {project.title}", exc_info=True)
            raise
        return await self.get_project_by_id(project.id, refresh=True)

    # 通用的更新方法
    async def update_project(self, project: ProjectListing, update_data: dict) -> ProjectListing:
        for key, value in update_data.items():
            setattr(project, key, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"更新案件失敗: {project.id}", exc_info=True)
            raise
        return await self.get_project_by_id(project.id, refresh=True)

    async def delete_project(self, project_id: int) -> bool:
        stmt = (
            select(ProjectListing)
            .where(ProjectListing.id == project_id)
            .options(selectinload(ProjectListing.interests))
        )
        result = await self.db.execute(stmt)
        project = result.scalars().first()
        if project is None:
            return False
        await self.db.delete(project)
        await self.db.commit()
        return True

    async def add_interest(self, project_id: int, freelancer_id: int) -> bool:
        """
        (核心功能) 記錄工作者對案件的興趣
        - 第一次：新增 ProjectInterest 並 interest_count + 1，回傳 True
        - 重複：unique constraint 擋下，不遞增，回傳 False
        """
        existing = await self.db.execute(
            select(ProjectInterest.id).where(
                ProjectInterest.project_listing_id == project_id,
                ProjectInterest.freelancer_id == freelancer_id,
            )
        )
        if existing.first() is not None:
            return False

        try:
            self.db.add(ProjectInterest(project_listing_id=project_id, freelancer_id=freelancer_id))
            # (重要) 以 SQL 遞增，避免讀-改-寫的競爭
            await self.db.execute(
                update(ProjectListing)
                .where(ProjectListing.id == project_id)
                .values(interest_count=ProjectListing.interest_count + 1)
            )
            await self.db.commit()
        except IntegrityError:
            # 同時送出的另一個請求先寫入了
            await self.db.rollback()
            logger.info(f"Interest already recorded: project={project_id}, freelancer={freelancer_id}")
            return False
        return True
