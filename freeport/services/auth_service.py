import logging
from sqlalchemy.ext.asyncio import AsyncSession
from freeport.repositories.user_repo import UserRepository
from freeport.repositories.freelancer_repo import FreelancerRepository
from freeport.repositories.employer_repo import EmployerRepository
from freeport.core.security import verify_password, create_access_token, get_password_hash
from freeport.core.exceptions import validation_failed
from freeport.models.user import User, UserTypeEnum
from freeport.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊 (Profile 於第一次進入 Dashboard 時才建立)
        """
        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise validation_failed("email", "The email has already been taken.")

        # 2. 雜湊密碼 + 建立 User ORM 模型
        new_user = User(
            name=user_create.name,
            email=user_create.email,
            password_hash=get_password_hash(user_create.password),
            user_type=user_create.user_type,
        )

        # 3. 呼叫 Repository 儲存到資料庫
        created_user = await self.user_repo.create_user(new_user)
        logger.info(f"User registered: {created_user.id} ({created_user.user_type.value})")
        return created_user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": str(user.id),  # 'sub' 是 JWT 的標準欄位，存 user id
                "user_type": user.user_type.value,
                "ver": user.token_version,
            }
        )

    async def logout(self, user: User) -> None:
        """撤銷該帳號所有已發出的 token"""
        version = await self.user_repo.bump_token_version(user)
        logger.info(f"User logged out: {user.id} (token version {version})")

    async def get_user_info(self, user: User) -> dict:
        """
        GET /auth/user：帳號資料 + 對應 Profile 的大頭貼 / 公司 Logo
        """
        picture = None
        if user.user_type == UserTypeEnum.freelancer:
            profile = await FreelancerRepository(self.db).get_by_email(user.email)
            picture = profile.profile_picture if profile else None
        else:
            profile = await EmployerRepository(self.db).get_by_email(user.email)
            picture = profile.company_logo if profile else None

        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "user_type": user.user_type,
            "avatar": picture,
            "profile_picture": picture,
        }
