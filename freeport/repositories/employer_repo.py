# freeport/repositories/employer_repo.py
import logging
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from freeport.models.employer_profile import Employer
from freeport.models.project import ProjectListing

logger = logging.getLogger(__name__)


class EmployerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, employer_id: int, refresh: bool = False) -> Employer | None:
        stmt = select(Employer).where(Employer.employer_id == employer_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Employer | None:
        """不分大小寫比對 email"""
        stmt = select(Employer).where(func.lower(Employer.email) == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_employers(
        self,
        search: Optional[str] = None,
        industry: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Employer]:
        """
        依條件搜尋雇主
        1. search: 公司名稱 / 聯絡人 / email / 地址 模糊比對
        2. industry: 產業別模糊比對
        3. location: 地址模糊比對
        """
        stmt = select(Employer)

        if search:
            pattern = f"%{search}%"
            logger.info(f"Applying employer search filter: {search}")
            stmt = stmt.where(
                or_(
                    Employer.company_name.ilike(pattern),
                    Employer.contact_person_name.ilike(pattern),
                    Employer.email.ilike(pattern),
                    Employer.address.ilike(pattern),
                )
            )
        if industry:
            stmt = stmt.where(Employer.industry_type.ilike(f"%{industry}%"))
        if location:
            stmt = stmt.where(Employer.address.ilike(f"%{location}%"))

        result = await self.db.execute(stmt.order_by(Employer.employer_id))
        return result.scalars().all()

    async def create_employer(self, employer: Employer) -> Employer:
        try:
            self.db.add(employer)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"建立雇主失敗: {employer.email}", exc_info=True)
            raise
        return await self.get_by_id(employer.employer_id, refresh=True)

    async def update_employer(self, employer: Employer, update_data: dict) -> Employer:
        for key, value in update_data.items():
            setattr(employer, key, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"更新雇主失敗: {employer.employer_id}", exc_info=True)
            raise
        return await self.get_by_id(employer.employer_id, refresh=True)

    async def delete_employer(self, employer_id: int) -> bool:
        # 連帶刪除收藏與案件 (以及案件上的 interest)
        stmt = (
            select(Employer)
            .where(Employer.employer_id == employer_id)
            .options(
                selectinload(Employer.saved_freelancers),
                selectinload(Employer.projects).selectinload(ProjectListing.interests),
            )
        )
        result = await self.db.execute(stmt)
        employer = result.scalars().first()
        if employer is None:
            return False
        await self.db.delete(employer)
        await self.db.commit()
        return True
