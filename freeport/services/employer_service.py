# freeport/services/employer_service.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, UploadFile, status
from freeport.core.exceptions import validation_failed
from freeport.models.employer_profile import Employer
from freeport.models.saved_bookmarked import SavedBookmarked
from freeport.repositories.employer_repo import EmployerRepository
from freeport.repositories.bookmark_repo import BookmarkRepository
from freeport.schemas.profile_schema import EmployerCreate, EmployerUpdate
from freeport.services.media_service import MediaService

logger = logging.getLogger(__name__)


class EmployerService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = EmployerRepository(db)

    async def get_employer(self, employer_id: int) -> Employer:
        employer = await self.repo.get_by_id(employer_id)
        if not employer:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Employer not found")
        return employer

    async def search_employers(
        self,
        search: Optional[str] = None,
        industry: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Employer]:
        return await self.repo.list_employers(search=search, industry=industry, location=location)

    async def _ensure_email_available(self, email: str, current_id: Optional[int] = None) -> None:
        existing = await self.repo.get_by_email(email)
        if existing and existing.employer_id != current_id:
            raise validation_failed("Email", "The email has already been taken.")

    async def create_employer(self, data: EmployerCreate) -> Employer:
        await self._ensure_email_available(data.email)
        created = await self.repo.create_employer(Employer(**data.model_dump()))
        logger.info(f"Employer created: {created.employer_id}")
        return created

    async def update_employer(self, employer_id: int, data: EmployerUpdate) -> Employer:
        employer = await self.get_employer(employer_id)
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("email"):
            await self._ensure_email_available(update_data["email"], current_id=employer_id)
        return await self.repo.update_employer(employer, update_data)

    async def delete_employer(self, employer_id: int) -> None:
        if not await self.repo.delete_employer(employer_id):
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Employer not found")
        logger.info(f"Employer deleted: {employer_id}")

    async def list_bookmarks(self, employer_id: int) -> List[SavedBookmarked]:
        """雇主收藏的工作者 (最新的在前)"""
        await self.get_employer(employer_id)
        return await BookmarkRepository(self.db).list_bookmarks(employer_id=employer_id)

    async def upload_company_logo(self, employer_id: int, upload: UploadFile) -> Employer:
        employer = await self.get_employer(employer_id)
        media = MediaService()
        url = await media.save_image(upload, folder="company_logos", field="company_logo")
        old_url = employer.company_logo
        updated = await self.repo.update_employer(employer, {"company_logo": url})
        await media.delete_file(old_url)
        return updated
