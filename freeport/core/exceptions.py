# freeport/core/exceptions.py
# 統一錯誤回應格式：{success: false, message, errors?}
import logging
from collections import defaultdict
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    # loc 例如 ("body", "FirstName") 或 ("query", "status")
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def collect_validation_errors(errors) -> dict:
    """Pydantic 錯誤列表 -> {欄位: [訊息, ...]}"""
    grouped = defaultdict(list)
    for err in errors:
        message = err.get("msg", "Invalid value")
        # "Value error, xxx" -> "xxx"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        grouped[_field_name(err.get("loc", ()))].append(message)
    return dict(grouped)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = collect_validation_errors(exc.errors())
    logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": "Validation error", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """在 main.py 中呼叫，掛上所有錯誤處理器"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


def validation_failed(field: str, message: str) -> RequestValidationError:
    """
    Service 層使用：產生與欄位驗證失敗相同格式的 422
    e.g. raise validation_failed("Email", "The email has already been taken.")
    """
    return RequestValidationError(
        [{"loc": ("body", field), "msg": message, "type": "value_error"}]
    )
