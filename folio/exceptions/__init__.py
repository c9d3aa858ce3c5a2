"""异常处理模块

使用示例:
    from folio.exceptions import Err, register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)

    raise Err.not_found("博客不存在")
"""

from .exceptions import (
    Err,
    ErrorCode,
    ErrorCodeType,
    BusinessException,
    AuthenticationException,        # 401
    AuthorizationException,         # 403
    ResourceNotFoundException,      # 404
    ResourceConflictException,      # 409
    ReorderInProgressException,     # 409
    ValidationException,            # 422
    ServiceUnavailableException,    # 503
    PersistenceException,           # 503
)

from .handlers import (
    register_exception_handlers,
    business_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
    ValidationErrorTranslator,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "AuthenticationException",
    "AuthorizationException",
    "ResourceNotFoundException",
    "ResourceConflictException",
    "ReorderInProgressException",
    "ValidationException",
    "ServiceUnavailableException",
    "PersistenceException",
    "register_exception_handlers",
    "business_exception_handler",
    "validation_exception_handler",
    "http_exception_handler",
    "general_exception_handler",
    "ValidationErrorTranslator",
]
