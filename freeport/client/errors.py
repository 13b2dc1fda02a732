# freeport/client/errors.py
# 前端同步層的錯誤分類 (對應 HTTP 狀態碼)
from typing import Dict, List, Optional


class FreeportError(Exception):
    """所有 client 錯誤的基底"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(FreeportError):
    """422：欄位驗證失敗，errors = {欄位: [訊息, ...]}"""

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message, status_code=422)
        self.errors = errors or {}

    @property
    def first_message(self) -> str:
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return self.message


class AuthError(FreeportError):
    """401：token 失效，已強制登出"""

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message, status_code=401)


class NotFoundError(FreeportError):
    """404：顯示空狀態，不是致命錯誤"""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class NetworkError(FreeportError):
    """連線失敗 / 逾時 (沒有收到 HTTP 回應)"""


class ApiError(FreeportError):
    """其他非 2xx 回應 (400 / 403 / 500 ...)"""


class IdentityError(FreeportError):
    """帳號資料不完整 (e.g. 沒有 email)，無法對應 Profile"""


class ProfileResolutionError(FreeportError):
    """找不到也建立不了 Profile；頁面應顯示可重試的錯誤狀態"""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
