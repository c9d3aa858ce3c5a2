"""全局异常处理器

将异常转换为统一的 JSON 响应格式:
    {"status", "message", "msg_details", "data", "error_code"}
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Dict, Optional
import traceback
import os

from folio.log import get_logger
from folio.response import ResponseStatus, ValidationErrorResponse
from .exceptions import BusinessException, ErrorCode

logger = get_logger()


def _is_debug() -> bool:
    return os.getenv("FOLIO_DEBUG", "false").lower() == "true"


# ==================== 验证错误翻译器 ====================

class ValidationErrorTranslator:
    """验证错误翻译器

    将 Pydantic v2 的错误类型翻译为中文消息，应用可通过 add_messages 扩展。

    使用示例:
        ValidationErrorTranslator.add_messages({
            "value_error.slug": "slug 格式不正确",
        })
    """

    _custom_messages: Dict[str, str] = {}

    _builtin_messages: Dict[str, str] = {
        "missing": "此字段为必填项",
        "int_type": "必须是整数",
        "int_parsing": "必须是整数",
        "float_type": "必须是数字",
        "bool_type": "必须是布尔值",
        "bool_parsing": "必须是布尔值",
        "str_type": "必须是字符串",
        "list_type": "必须是列表",
        "dict_type": "必须是对象",
        "string_pattern_mismatch": "格式不正确",
        "date_parsing": "日期格式不正确",
        "date_from_datetime_parsing": "日期格式不正确",
        "datetime_parsing": "日期时间格式不正确",
        "json_invalid": "JSON 格式不正确",
        "value_error": "值无效",
        "extra_forbidden": "不允许额外的字段",
        "model_type": "必须是有效的对象",
    }

    _context_message_templates: Dict[str, str] = {
        "string_too_short": "长度不能少于 {min_length} 个字符",
        "string_too_long": "长度不能超过 {max_length} 个字符",
        "greater_than": "必须大于 {gt}",
        "greater_than_equal": "必须大于或等于 {ge}",
        "less_than": "必须小于 {lt}",
        "less_than_equal": "必须小于或等于 {le}",
        "too_short": "元素数量不能少于 {min_length} 个",
        "too_long": "元素数量不能超过 {max_length} 个",
    }

    @classmethod
    def add_messages(cls, messages: Dict[str, str]) -> None:
        cls._custom_messages.update(messages)

    @classmethod
    def translate(cls, error_type: str, error: dict) -> Optional[str]:
        """翻译验证错误，无法翻译时返回 None

        优先级: 自定义消息 > 带上下文的模板 > 内置静态消息
        """
        ctx = error.get("ctx") or {}

        if error_type in cls._custom_messages:
            return cls._custom_messages[error_type]

        if error_type in cls._context_message_templates:
            template = cls._context_message_templates[error_type]
            try:
                return template.format(**ctx)
            except (KeyError, IndexError):
                return template

        if error_type in ("enum", "literal_error"):
            return f"值必须是以下之一: {ctx.get('expected', '')}"

        return cls._builtin_messages.get(error_type)


def _error_content(message: str, details=None, error_code: str = None) -> dict:
    content = {
        "status": ResponseStatus.ERROR.value,
        "message": message,
        "msg_details": details or [],
        "data": {},
    }
    if error_code:
        content["error_code"] = error_code
    return content


async def business_exception_handler(
    request: Request,
    exc: BusinessException
) -> JSONResponse:
    """业务异常处理器"""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        f"Business exception occurred: {exc.code} - {exc.message}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
        }
    )

    content = _error_content(exc.message, exc.details, exc.code)
    if _is_debug() and exc.extra:
        content["debug_info"] = exc.extra

    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """请求参数验证异常处理器，错误消息格式为 "字段: 消息" """
    request_id = getattr(request.state, "request_id", "unknown")

    errors = []
    for error in exc.errors():
        loc_parts = [str(loc) for loc in error["loc"] if loc not in ("body", "query", "path", "header", "cookie")]
        field = ".".join(loc_parts) if loc_parts else "请求体"
        msg = ValidationErrorTranslator.translate(error["type"], error) or error["msg"]
        errors.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error: {len(errors)} field(s) failed validation",
        extra={"request_id": request_id, "path": request.url.path, "method": request.method}
    )

    return JSONResponse(
        status_code=422,
        content=_error_content("请求参数验证失败", errors, ErrorCode.VALIDATION_ERROR.value)
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """HTTP 异常处理器"""
    request_id = getattr(request.state, "request_id", "unknown")

    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={"request_id": request_id, "path": request.url.path, "method": request.method}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(str(exc.detail), error_code=f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """通用异常处理器，记录完整堆栈，不向调用方暴露原始异常"""
    request_id = getattr(request.state, "request_id", "unknown")
    tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "traceback": "".join(tb_lines),
        }
    )

    content = _error_content("服务器内部错误", error_code=ErrorCode.INTERNAL_SERVER_ERROR.value)
    if _is_debug():
        content["msg_details"] = [f"异常类型: {type(exc).__name__}", f"异常消息: {exc}"]
        content["debug_info"] = {"traceback": tb_lines[-5:]}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content
    )


def register_exception_handlers(app) -> None:
    """注册所有异常处理器到 FastAPI 应用

    使用示例:
        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.router.responses[422] = {
        "description": "请求参数验证失败",
        "model": ValidationErrorResponse,
    }

    logger.info("Exception handlers registered successfully")
