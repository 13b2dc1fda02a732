# freeport/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、上傳檔案位置等)
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 環境變數檔案
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # 資料庫設定 (e.g. mysql+aiomysql://... 或 sqlite+aiosqlite:///./freeport.db)
    DATABASE_URL: str
    # (可選) 設為 True 會在 console 印出 SQL 語句
    DB_ECHO: bool = False

    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 上傳檔案 (頭像 / 公司 Logo) 的存放目錄，對外以 /storage 提供
    STORAGE_DIR: str = "storage"
    STORAGE_URL_PREFIX: str = "/storage"
    # 上傳檔案大小上限 (bytes)
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024


# 建立設定實例
settings = Settings()
