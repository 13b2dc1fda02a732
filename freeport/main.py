import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from freeport.core.config import settings
from freeport.core.database import create_all_tables
from freeport.core.exceptions import register_exception_handlers
from freeport.routers import (
    auth_router, profile_router,
    freelancer_router, employer_router,
    skill_router, education_router, portfolio_router, availability_router,
    bookmark_router, project_router, notification_router,
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from freeport.models import user
from freeport.models import freelancer_profile
from freeport.models import employer_profile
from freeport.models import skill
from freeport.models import education
from freeport.models import portfolio_work
from freeport.models import availability
from freeport.models import saved_bookmarked
from freeport.models import project
from freeport.models import notification


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)  # 建立一個 logger 實例


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 開發環境：啟動時建立缺少的資料表
    await create_all_tables()
    logger.info("Database tables ready")
    yield


app = FastAPI(title="Freeport API", lifespan=lifespan)

# --- 設定 CORS (跨來源資源共用) ---
# 允許所有來源 (在生產環境中應限制)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 統一錯誤格式 {success: false, message, errors?} ---
register_exception_handlers(app)

# --- 上傳檔案 (大頭貼 / 公司 Logo) ---
app.mount(
    settings.STORAGE_URL_PREFIX,
    StaticFiles(directory=settings.STORAGE_DIR, check_dir=False),
    name="storage",
)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"success": True, "message": "Backend is running!"}

# --- 載入 API 路由 (全部掛在 /api 底下) ---
for module in (
    auth_router, profile_router,
    freelancer_router, employer_router,
    skill_router, education_router, portfolio_router, availability_router,
    bookmark_router, project_router, notification_router,
):
    app.include_router(module.router, prefix="/api")
