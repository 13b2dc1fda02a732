# freeport/repositories/user_repo.py
# 負責與帳號相關的資料庫操作
import logging
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from freeport.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        """
        透過 email 查詢使用者
        """
        stmt = select(User).where(User.email == email)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_user_by_id(self, user_id: int) -> User | None:
        """
        透過 id 查詢使用者
        """
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def create_user(self, user: User) -> User:
        """
        新增使用者到資料庫
        """
        try:
            self.db.add(user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"建立使用者失敗: {user.email}", exc_info=True)
            raise
        return user

    async def bump_token_version(self, user: User) -> int:
        """
        登出：token_version + 1，所有舊 token 失效
        """
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(token_version=User.token_version + 1)
        )
        await self.db.execute(stmt)
        await self.db.commit()
        refreshed = await self.db.execute(
            select(User).where(User.id == user.id).execution_options(populate_existing=True)
        )
        return refreshed.scalars().one().token_version
