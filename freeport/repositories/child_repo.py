# freeport/repositories/child_repo.py
# 工作者子資料 (Skill / Education / PortfolioWork / Availability) 共用的 CRUD
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger(__name__)


class ChildRepository:
    """
    model: ORM 類別 (e.g. Skill)
    pk_name: 主鍵欄位名稱 (e.g. "skill_id")
    """

    def __init__(self, db: AsyncSession, model, pk_name: str):
        self.db = db
        self.model = model
        self.pk_name = pk_name

    @property
    def _pk(self):
        return getattr(self.model, self.pk_name)

    async def get_by_id(self, record_id: int, refresh: bool = False):
        stmt = select(self.model).where(self._pk == record_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_records(self, freelancer_id: Optional[int] = None) -> List:
        stmt = select(self.model)
        if freelancer_id is not None:
            stmt = stmt.where(self.model.freelancer_id == freelancer_id)
        result = await self.db.execute(stmt.order_by(self._pk))
        return result.scalars().all()

    async def create_record(self, data: dict):
        record = self.model(**data)
        try:
            self.db.add(record)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"建立 {self.model.__name__} 失敗: {data}", exc_info=True)
            raise
        return await self.get_by_id(getattr(record, self.pk_name), refresh=True)

    async def update_record(self, record, update_data: dict):
        for key, value in update_data.items():
            setattr(record, key, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"更新 {self.model.__name__} 失敗: {update_data}", exc_info=True)
            raise
        return await self.get_by_id(getattr(record, self.pk_name), refresh=True)

    async def delete_record(self, record) -> None:
        await self.db.delete(record)
        await self.db.commit()
