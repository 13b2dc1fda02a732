# freeport/repositories/bookmark_repo.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from freeport.models.saved_bookmarked import SavedBookmarked

logger = logging.getLogger(__name__)


class BookmarkRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, saved_id: int, refresh: bool = False) -> SavedBookmarked | None:
        stmt = select(SavedBookmarked).where(SavedBookmarked.saved_id == saved_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_pair(self, employer_id: int, freelancer_id: int) -> SavedBookmarked | None:
        """同一位雇主對同一位工作者的收藏 (最多一筆)"""
        stmt = select(SavedBookmarked).where(
            SavedBookmarked.employer_id == employer_id,
            SavedBookmarked.freelancer_id == freelancer_id,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_bookmarks(self, employer_id: Optional[int] = None) -> List[SavedBookmarked]:
        """
        收藏列表；指定 employer_id 時依收藏時間倒序
        """
        stmt = select(SavedBookmarked)
        if employer_id is not None:
            stmt = stmt.where(SavedBookmarked.employer_id == employer_id).order_by(
                SavedBookmarked.saved_date.desc(), SavedBookmarked.saved_id.desc()
            )
        else:
            stmt = stmt.order_by(SavedBookmarked.saved_id)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_bookmark(self, bookmark: SavedBookmarked) -> SavedBookmarked:
        """
        (注意) 重複收藏會觸發 uq_saved_bookmarked_pair，IntegrityError 往上拋
        """
        try:
            self.db.add(bookmark)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.warning(
                f"建立收藏失敗: employer={bookmark.employer_id}, freelancer={bookmark.freelancer_id}"
            )
            raise
        return await self.get_by_id(bookmark.saved_id, refresh=True)

    async def update_bookmark(self, bookmark: SavedBookmarked, update_data: dict) -> SavedBookmarked:
        for key, value in update_data.items():
            setattr(bookmark, key, value)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"更新收藏失敗: {bookmark.saved_id}", exc_info=True)
            raise
        return await self.get_by_id(bookmark.saved_id, refresh=True)

    async def delete_bookmark(self, bookmark: SavedBookmarked) -> None:
        await self.db.delete(bookmark)
        await self.db.commit()
