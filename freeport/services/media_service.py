# freeport/services/media_service.py
# 上傳圖片 (大頭貼 / 公司 Logo) 存到 STORAGE_DIR，回傳 storage 相對路徑
import logging
import os
import uuid
from pathlib import Path
import aiofiles
import aiofiles.os
from fastapi import HTTPException, UploadFile, status
from freeport.core.config import settings
from freeport.core.exceptions import validation_failed

logger = logging.getLogger(__name__)

_ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


class MediaService:
    def __init__(self, storage_dir: str | None = None, url_prefix: str | None = None):
        self.storage_dir = Path(storage_dir or settings.STORAGE_DIR)
        self.url_prefix = (url_prefix or settings.STORAGE_URL_PREFIX).rstrip("/")

    async def save_image(self, upload: UploadFile, folder: str, field: str) -> str:
        """
        驗證並儲存圖片
        1. 只接受 image/* 且副檔名在白名單內
        2. 大小不可超過 MAX_UPLOAD_BYTES
        回傳 e.g. "/storage/profile_pictures/<uuid>.png"
        """
        extension = os.path.splitext(upload.filename or "")[1].lower()
        if not (upload.content_type or "").startswith("image/") or extension not in _ALLOWED_EXTENSIONS:
            raise validation_failed(field, f"The {field} must be an image.")

        content = await upload.read()
        if not content:
            raise validation_failed(field, f"The {field} failed to upload.")
        if len(content) > settings.MAX_UPLOAD_BYTES:
            limit_kb = settings.MAX_UPLOAD_BYTES // 1024
            raise validation_failed(field, f"The {field} must not be greater than {limit_kb} kilobytes.")

        filename = f"{uuid.uuid4().hex}{extension}"
        target_dir = self.storage_dir / folder
        try:
            os.makedirs(target_dir, exist_ok=True)
            async with aiofiles.open(target_dir / filename, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error(f"Failed to store upload {folder}/{filename}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="The file could not be stored."
            )
        logger.info(f"Stored upload {folder}/{filename} ({len(content)} bytes)")
        return f"{self.url_prefix}/{folder}/{filename}"

    async def delete_file(self, url: str | None) -> None:
        """刪除舊檔案；外部 URL 或找不到檔案時略過"""
        if not url or not url.startswith(self.url_prefix + "/"):
            return
        path = (self.storage_dir / url[len(self.url_prefix) + 1:]).resolve()
        # 只允許刪除 STORAGE_DIR 底下的檔案
        if not path.is_relative_to(self.storage_dir.resolve()):
            logger.warning(f"Refusing to delete file outside storage: {url}")
            return
        if path.is_file():
            await aiofiles.os.remove(path)
