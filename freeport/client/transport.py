# freeport/client/transport.py
# HTTP 傳輸層：附加 Bearer token、拆開 {success, message, data} 封包、把錯誤轉成 client 錯誤分類
import logging
from typing import Any, Callable, Dict, Optional

import httpx

from freeport.client.config import client_settings
from freeport.client.errors import (
    ApiError, AuthError, NetworkError, NotFoundError, ValidationError,
)
from freeport.client.session import SessionContext

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def unwrap_envelope(body: Any) -> Any:
    """
    {success, message, data} -> data
    (注意) 有些端點會包兩層 (data.data)，一併拆開
    沒有 data 欄位的回應原樣回傳
    """
    if not isinstance(body, dict) or "data" not in body:
        return body
    data = body["data"]
    if isinstance(data, dict) and "data" in data and set(data) <= {"success", "message", "data", "count"}:
        return data["data"]
    return data


def _error_message(body: Any, default: str) -> str:
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or default)
    return default


class ApiClient:
    """
    所有 API 呼叫都經過這裡
    - 401：清除 session，呼叫 on_unauthorized("/login")，丟出 AuthError
    - 422：ValidationError (含欄位訊息)
    - 404：NotFoundError
    - 連線失敗：NetworkError
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_unauthorized: Optional[Callable[[str], None]] = None,
    ):
        self.session = session
        self.base_url = (base_url or client_settings.API_BASE_URL).rstrip("/")
        self.on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else client_settings.HTTP_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        files: Any = None,
        raw: bool = False,
    ) -> Any:
        """
        送出請求並回傳拆開後的 data
        raw=True 時回傳完整 body (e.g. 登入回應 {token, user_info})
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._client.request(
                method, path, params=params, json=json, files=files, headers=self._headers()
            )
        except httpx.TransportError as exc:
            logger.warning(f"{method} {path} failed: {exc!r}")
            raise NetworkError(f"Network error: unable to reach {self.base_url}") from exc

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        if response.is_success:
            return body if raw else unwrap_envelope(body)

        self._raise_for_status(response.status_code, body)

    def _raise_for_status(self, status_code: int, body: Any) -> None:
        if status_code == 401:
            # (重要) 任何 401 都強制登出並導回登入頁
            self.session.logout()
            if self.on_unauthorized is not None:
                self.on_unauthorized(LOGIN_PATH)
            raise AuthError(_error_message(body, "Unauthenticated."))

        if status_code == 422:
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ValidationError(_error_message(body, "Validation error"), errors=errors or {})

        if status_code == 404:
            raise NotFoundError(_error_message(body, "Not found"))

        raise ApiError(_error_message(body, f"Request failed with status {status_code}"), status_code)

    async def get(self, path: str, **kwargs) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self.request("DELETE", path, **kwargs)
