# freeport/services/child_resource_service.py
# Skill / Education / PortfolioWork / Availability 共用的業務邏輯
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from pydantic import BaseModel

from freeport.core.exceptions import validation_failed
from freeport.models.skill import Skill
from freeport.models.education import Education
from freeport.models.portfolio_work import PortfolioWork
from freeport.models.availability import Availability
from freeport.repositories.child_repo import ChildRepository
from freeport.repositories.freelancer_repo import FreelancerRepository

logger = logging.getLogger(__name__)


class ChildResourceService:
    """
    label: 錯誤訊息用的名稱 (e.g. "Skill" -> "Skill not found")
    """

    def __init__(self, db: AsyncSession, model, pk_name: str, label: str, one_per_freelancer: bool = False):
        self.db = db
        self.repo = ChildRepository(db, model, pk_name)
        self.freelancer_repo = FreelancerRepository(db)
        self.label = label
        # availability 每位工作者只有一筆
        self.one_per_freelancer = one_per_freelancer

    async def _ensure_freelancer_exists(self, freelancer_id: int) -> None:
        if await self.freelancer_repo.get_by_id(freelancer_id) is None:
            raise validation_failed("FreelancerID", "The selected freelancer id is invalid.")

    async def list_records(self, freelancer_id: Optional[int] = None) -> List:
        return await self.repo.list_records(freelancer_id=freelancer_id)

    async def get_record(self, record_id: int):
        record = await self.repo.get_by_id(record_id)
        if record is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"{self.label} not found")
        return record

    async def create_record(self, data: BaseModel):
        """
        1. FreelancerID 必須存在
        2. (availability) 不可重複建立
        3. 寫入資料庫
        """
        # 沒給的欄位交給 Model 的預設值 (e.g. Certification = "No")
        payload = data.model_dump(exclude_none=True)
        await self._ensure_freelancer_exists(data.freelancer_id)

        if self.one_per_freelancer and await self.repo.list_records(freelancer_id=data.freelancer_id):
            raise validation_failed("FreelancerID", f"{self.label} already exists for this freelancer.")

        record = await self.repo.create_record(payload)
        logger.info(f"{self.label} created for freelancer {data.freelancer_id}")
        return record

    async def update_record(self, record_id: int, data: BaseModel):
        record = await self.get_record(record_id)
        update_data = data.model_dump(exclude_unset=True)
        return await self.repo.update_record(record, update_data)

    async def delete_record(self, record_id: int) -> None:
        record = await self.get_record(record_id)
        await self.repo.delete_record(record)
        logger.info(f"{self.label} deleted: {record_id}")


# 各資源的 Service (router 直接使用)
def skill_service(db: AsyncSession) -> ChildResourceService:
    return ChildResourceService(db, Skill, "skill_id", "Skill")


def education_service(db: AsyncSession) -> ChildResourceService:
    return ChildResourceService(db, Education, "education_id", "Education")


def portfolio_service(db: AsyncSession) -> ChildResourceService:
    return ChildResourceService(db, PortfolioWork, "portfolio_id", "Portfolio work")


def availability_service(db: AsyncSession) -> ChildResourceService:
    return ChildResourceService(db, Availability, "availability_id", "Availability", one_per_freelancer=True)
