# freeport/client/notifier.py
# 非阻塞的使用者提示 (toast)：收集起來給畫面顯示，同時寫入 log
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal

logger = logging.getLogger(__name__)

ToastLevel = Literal["success", "info", "error"]


@dataclass(frozen=True)
class Toast:
    level: ToastLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    def __init__(self):
        self._toasts: List[Toast] = []

    def _push(self, level: ToastLevel, message: str) -> Toast:
        toast = Toast(level=level, message=message)
        self._toasts.append(toast)
        if level == "error":
            logger.warning(f"toast[error]: {message}")
        else:
            logger.info(f"toast[{level}]: {message}")
        return toast

    def success(self, message: str) -> Toast:
        return self._push("success", message)

    def info(self, message: str) -> Toast:
        return self._push("info", message)

    def error(self, message: str) -> Toast:
        return self._push("error", message)

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    @property
    def errors(self) -> List[Toast]:
        return [t for t in self._toasts if t.level == "error"]

    def drain(self) -> List[Toast]:
        """取出並清空 (畫面顯示過就不再重複)"""
        toasts, self._toasts = self._toasts, []
        return toasts
