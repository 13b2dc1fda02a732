# freeport/repositories/freelancer_repo.py
import logging
from typing import List, Optional
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from freeport.models.freelancer_profile import Freelancer
from freeport.models.skill import Skill

logger = logging.getLogger(__name__)


class FreelancerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, freelancer_id: int, refresh: bool = False) -> Freelancer | None:
        """
        透過 ID 獲取工作者 (skills / education / portfolio / availability 由 lazy="selectin" 一併載入)
        """
        stmt = select(Freelancer).where(Freelancer.freelancer_id == freelancer_id)
        if refresh:
            # (重要) commit 後重新讀取，覆蓋 identity map 中的舊資料
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Freelancer | None:
        """不分大小寫比對 email"""
        stmt = select(Freelancer).where(func.lower(Freelancer.email) == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_freelancers(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[Freelancer]:
        """
        (核心功能) 依條件搜尋工作者
        1. search: 名字 / 姓氏 / email / 自介 / 技能名稱 任一模糊比對
        2. location: 模糊比對
        3. sort_by=newest: 依建立時間倒序
        """
        stmt = select(Freelancer)

        if search:
            pattern = f"%{search}%"
            logger.info(f"Applying freelancer search filter: {search}")
            stmt = stmt.where(
                or_(
                    Freelancer.first_name.ilike(pattern),
                    Freelancer.last_name.ilike(pattern),
                    Freelancer.email.ilike(pattern),
                    Freelancer.bio.ilike(pattern),
                    Freelancer.skills.any(Skill.skill_name.ilike(pattern)),
                )
            )

        if location:
            stmt = stmt.where(Freelancer.location.ilike(f"%{location}%"))

        if sort_by == "newest":
            stmt = stmt.order_by(Freelancer.created_at.desc(), Freelancer.freelancer_id.desc())
        else:
            stmt = stmt.order_by(Freelancer.freelancer_id)

        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_freelancer(self, freelancer: Freelancer) -> Freelancer:
        """
        新增工作者；Email 重複時 IntegrityError 會往上拋 (由 Service 決定如何處理)
        """
        try:
            self.db.add(freelancer)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"建立工作者失敗: {freelancer.email}", exc_info=True)
            raise
        return await self.get_by_id(freelancer.freelancer_id, refresh=True)

    async def update_freelancer(self, freelancer: Freelancer, update_data: dict) -> Freelancer:
        """(U) 只更新有傳入的欄位"""
        for key, value in update_data.items():
            setattr(freelancer, key, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"更新工作者失敗: {freelancer.freelancer_id}", exc_info=True)
            raise
        return await self.get_by_id(freelancer.freelancer_id, refresh=True)

    async def delete_freelancer(self, freelancer_id: int) -> bool:
        # (注意) 刪除會連帶刪除收藏，需先載入 saved_by 才能 cascade
        stmt = (
            select(Freelancer)
            .where(Freelancer.freelancer_id == freelancer_id)
            .options(selectinload(Freelancer.saved_by))
        )
        result = await self.db.execute(stmt)
        freelancer = result.scalars().first()
        if freelancer is None:
            return False
        await self.db.delete(freelancer)
        await self.db.commit()
        return True
