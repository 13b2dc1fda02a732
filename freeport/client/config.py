# freeport/client/config.py
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    前端同步層的設定 (環境變數前綴 FREEPORT_)
    e.g. FREEPORT_API_BASE_URL=http://localhost:8000/api
    """
    model_config = SettingsConfigDict(env_prefix="FREEPORT_", env_file=".env", extra="ignore")

    API_BASE_URL: str = "http://localhost:8000/api"
    HTTP_TIMEOUT: float = 30.0

    # 有設定時 authToken / userType 會存成 JSON 檔 (相當於瀏覽器的 localStorage)
    SESSION_FILE: Optional[str] = None

    # server: 呼叫 POST /profiles/me (伺服器端 find-or-create)
    # search: 以 email 搜尋列表，找不到才建立
    PROFILE_RESOLVE_MODE: Literal["server", "search"] = "server"


client_settings = ClientSettings()
