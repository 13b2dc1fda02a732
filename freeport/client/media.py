# freeport/client/media.py
import re
from typing import Optional

from freeport.client.config import client_settings

_API_SUFFIX = re.compile(r"/api/?$")


def api_origin(api_base_url: Optional[str] = None) -> str:
    """http://localhost:8000/api -> http://localhost:8000"""
    base = api_base_url if api_base_url is not None else client_settings.API_BASE_URL
    return _API_SUFFIX.sub("", base.rstrip("/") + "/").rstrip("/")


def resolve_media_url(path: Optional[str], api_base_url: Optional[str] = None) -> Optional[str]:
    """
    上傳檔案的網址 (e.g. /storage/profile_pictures/x.png) 轉成可直接載入的完整網址
    - 已經是 http(s) 開頭的網址原樣回傳
    - 相對路徑補上開頭的 / 再接上 API origin
    """
    if not path:
        return None
    if path.startswith("http://") or path.startswith("https://"):
        return path
    normalised = path if path.startswith("/") else f"/{path}"
    return f"{api_origin(api_base_url)}{normalised}"
