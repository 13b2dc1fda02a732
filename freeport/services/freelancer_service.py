# freeport/services/freelancer_service.py
import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, UploadFile, status
from freeport.core.exceptions import validation_failed
from freeport.models.freelancer_profile import Freelancer
from freeport.repositories.freelancer_repo import FreelancerRepository
from freeport.schemas.profile_schema import FreelancerCreate, FreelancerUpdate
from freeport.services.media_service import MediaService

logger = logging.getLogger(__name__)


class FreelancerService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = FreelancerRepository(db)

    async def get_freelancer(self, freelancer_id: int) -> Freelancer:
        freelancer = await self.repo.get_by_id(freelancer_id)
        if not freelancer:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer not found")
        return freelancer

    async def search_freelancers(
        self,
        search: Optional[str] = None,
        location: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[Freelancer]:
        return await self.repo.list_freelancers(search=search, location=location, sort_by=sort_by)

    async def _ensure_email_available(self, email: str, current_id: Optional[int] = None) -> None:
        existing = await self.repo.get_by_email(email)
        if existing and existing.freelancer_id != current_id:
            raise validation_failed("Email", "The email has already been taken.")

    async def create_freelancer(self, data: FreelancerCreate) -> Freelancer:
        """
        業務邏輯：建立工作者
        1. Email 不可重複
        2. 寫入資料庫
        """
        await self._ensure_email_available(data.email)
        freelancer = Freelancer(**data.model_dump())
        created = await self.repo.create_freelancer(freelancer)
        logger.info(f"Freelancer created: {created.freelancer_id}")
        return created

    async def update_freelancer(self, freelancer_id: int, data: FreelancerUpdate) -> Freelancer:
        freelancer = await self.get_freelancer(freelancer_id)
        # 只更新有傳入的欄位
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("email"):
            await self._ensure_email_available(update_data["email"], current_id=freelancer_id)
        return await self.repo.update_freelancer(freelancer, update_data)

    async def delete_freelancer(self, freelancer_id: int) -> None:
        if not await self.repo.delete_freelancer(freelancer_id):
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer not found")
        logger.info(f"Freelancer deleted: {freelancer_id}")

    async def upload_profile_picture(self, freelancer_id: int, upload: UploadFile) -> Freelancer:
        """
        上傳大頭貼：存檔 -> 更新 ProfilePicture -> 刪除舊檔
        """
        freelancer = await self.get_freelancer(freelancer_id)
        media = MediaService()
        url = await media.save_image(upload, folder="profile_pictures", field="profile_picture")
        old_url = freelancer.profile_picture
        updated = await self.repo.update_freelancer(freelancer, {"profile_picture": url})
        await media.delete_file(old_url)
        return updated
