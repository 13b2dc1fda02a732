# freeport/services/bookmark_service.py
import logging
from typing import List, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from freeport.core.exceptions import validation_failed
from freeport.models.saved_bookmarked import SavedBookmarked
from freeport.repositories.bookmark_repo import BookmarkRepository
from freeport.repositories.employer_repo import EmployerRepository
from freeport.repositories.freelancer_repo import FreelancerRepository
from freeport.schemas.bookmark_schema import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)


class BookmarkService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = BookmarkRepository(db)

    async def _validate_pair(self, employer_id: int, freelancer_id: int) -> None:
        if await FreelancerRepository(self.db).get_by_id(freelancer_id) is None:
            raise validation_failed("FreelancerID", "The selected freelancer id is invalid.")
        if await EmployerRepository(self.db).get_by_id(employer_id) is None:
            raise validation_failed("EmployerID", "The selected employer id is invalid.")

    async def list_bookmarks(self) -> List[SavedBookmarked]:
        return await self.repo.list_bookmarks()

    async def get_bookmark(self, saved_id: int) -> SavedBookmarked:
        bookmark = await self.repo.get_by_id(saved_id)
        if bookmark is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Bookmark not found")
        return bookmark

    async def create_bookmark(self, data: BookmarkCreate) -> Tuple[SavedBookmarked, bool]:
        """
        (重要) 冪等：同一組 (雇主, 工作者) 已收藏時直接回傳既有的那筆
        回傳 (bookmark, created)
        """
        employer_id, freelancer_id = data.employer_id, data.freelancer_id
        await self._validate_pair(employer_id, freelancer_id)

        existing = await self.repo.get_pair(employer_id, freelancer_id)
        if existing is not None:
            return existing, False

        bookmark = SavedBookmarked(employer_id=employer_id, freelancer_id=freelancer_id)
        if data.saved_date is not None:
            bookmark.saved_date = data.saved_date
        try:
            created = await self.repo.create_bookmark(bookmark)
        except IntegrityError:
            existing = await self.repo.get_pair(employer_id, freelancer_id)
            if existing is None:
                raise
            return existing, False

        logger.info(f"Employer {employer_id} bookmarked freelancer {freelancer_id}")
        return created, True

    async def update_bookmark(self, saved_id: int, data: BookmarkUpdate) -> SavedBookmarked:
        bookmark = await self.get_bookmark(saved_id)
        update_data = data.model_dump(exclude_unset=True)
        employer_id = update_data.get("employer_id", bookmark.employer_id)
        freelancer_id = update_data.get("freelancer_id", bookmark.freelancer_id)
        await self._validate_pair(employer_id, freelancer_id)

        # 改成另一組時，不可與既有收藏重複
        other = await self.repo.get_pair(employer_id, freelancer_id)
        if other is not None and other.saved_id != saved_id:
            raise validation_failed("FreelancerID", "This freelancer is already bookmarked by the employer.")
        return await self.repo.update_bookmark(bookmark, update_data)

    async def delete_bookmark(self, saved_id: int) -> None:
        bookmark = await self.get_bookmark(saved_id)
        await self.repo.delete_bookmark(bookmark)
        logger.info(f"Bookmark removed: {saved_id}")
