"""响应模块

统一的 JSON 响应格式:
    {"status": "success", "message": "...", "msg_details": [], "data": ...}
"""

from .base_response import (
    Resp,
    ResponseStatus,
    BaseResponse,
    OK,
    Created,
    BadRequest,
    Unauthorized,
    Forbidden,
    NotFound,
    Conflict,
    InternalServerError,
    Warning,
    ValidationErrorResponse,
)

__all__ = [
    "Resp",
    "ResponseStatus",
    "BaseResponse",
    "OK",
    "Created",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "InternalServerError",
    "Warning",
    "ValidationErrorResponse",
]
