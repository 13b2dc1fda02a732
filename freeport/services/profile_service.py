# freeport/services/profile_service.py
import logging
from typing import Tuple, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from freeport.models.employer_profile import Employer
from freeport.models.freelancer_profile import Freelancer
from freeport.models.user import User, UserTypeEnum
from freeport.repositories.freelancer_repo import FreelancerRepository
from freeport.repositories.employer_repo import EmployerRepository
from freeport.utils.text import split_display_name

logger = logging.getLogger(__name__)

Profile = Union[Freelancer, Employer]


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.freelancer_repo = FreelancerRepository(db)
        self.employer_repo = EmployerRepository(db)

    async def get_my_profile(self, user: User) -> Profile | None:
        """依據角色 + 帳號 email 取得 Profile"""
        return await self._get_profile(user.user_type, user.email)

    async def _get_profile(self, user_type: UserTypeEnum, email: str) -> Profile | None:
        if user_type == UserTypeEnum.freelancer:
            return await self.freelancer_repo.get_by_email(email)
        return await self.employer_repo.get_by_email(email)

    def _build_profile(self, user: User) -> Profile:
        """由帳號資料組出最小的 Profile"""
        if user.user_type == UserTypeEnum.freelancer:
            first, last = split_display_name(user.name)
            return Freelancer(first_name=first or "Freelancer", last_name=last, email=user.email)
        name = (user.name or "").strip()
        return Employer(
            company_name=name or "Company",
            contact_person_name=name or "Contact",
            email=user.email,
        )

    async def find_or_create_profile(self, user: User) -> Tuple[Profile, bool]:
        """
        (核心功能) 冪等的 find-or-create
        1. 先以 email 查詢
        2. 找不到才建立
        3. 同時有兩個請求建立時，unique constraint 會擋下後到的那個，改回傳已存在的 Profile
        回傳 (profile, created)
        """
        # (注意) rollback 會讓 session 內的物件過期，先取出需要的值
        user_id, user_type, email = user.id, user.user_type, user.email

        existing = await self._get_profile(user_type, email)
        if existing is not None:
            return existing, False

        profile = self._build_profile(user)
        try:
            if isinstance(profile, Freelancer):
                created = await self.freelancer_repo.create_freelancer(profile)
            else:
                created = await self.employer_repo.create_employer(profile)
        except IntegrityError:
            logger.info(f"Profile for user {user_id} was created concurrently, re-reading")
            existing = await self._get_profile(user_type, email)
            if existing is None:
                raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to resolve profile")
            return existing, False

        logger.info(f"Created {user_type.value} profile for user {user_id}")
        return created, True
