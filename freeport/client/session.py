# freeport/client/session.py
# 登入狀態 (authToken / userType)：明確的 init / login / logout 生命週期
import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from freeport.client.config import client_settings

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_TYPE_KEY = "userType"


class MemoryStore:
    """預設的 key-value store (程式結束即消失)"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def load(self) -> Dict[str, str]:
        return dict(self._data)

    def save(self, data: Dict[str, str]) -> None:
        self._data = dict(data)


class JsonFileStore:
    """以 JSON 檔保存，相當於瀏覽器的 localStorage"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning(f"Ignoring unreadable session file: {self.path}", exc_info=True)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)} if isinstance(data, dict) else {}

    def save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


def default_store():
    """有設定 FREEPORT_SESSION_FILE 時保存到檔案，否則只存在記憶體"""
    if client_settings.SESSION_FILE:
        return JsonFileStore(client_settings.SESSION_FILE)
    return MemoryStore()


class SessionContext:
    """
    整個 client 共用一份，注入給 ApiClient 與各頁面使用
    1. init(): 從 store 讀回上次的登入狀態
    2. login(token, user_type): 登入成功後寫入
    3. logout(): 清除並通知 listeners (任何 401 也會觸發)
    """

    def __init__(self, store=None):
        self.store = store or default_store()
        self._token: Optional[str] = None
        self._user_type: Optional[str] = None
        self._listeners: List[Callable[[], None]] = []

    def init(self) -> "SessionContext":
        data = self.store.load()
        self._token = data.get(TOKEN_KEY) or None
        self._user_type = data.get(USER_TYPE_KEY) or None
        return self

    def login(self, token: str, user_type: str) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self._token = token
        self._user_type = user_type
        self.store.save({TOKEN_KEY: token, USER_TYPE_KEY: user_type})
        logger.info(f"Session started ({user_type})")

    def logout(self) -> None:
        was_authenticated = self.is_authenticated
        self._token = None
        self._user_type = None
        self.store.save({})
        if was_authenticated:
            logger.info("Session cleared")
        for listener in list(self._listeners):
            listener()

    def on_logout(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user_type(self) -> Optional[str]:
        return self._user_type

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None
