"""业务异常类定义

定义服务使用的业务异常类体系。
"""

import copy
from typing import Optional, List, Any, Dict, Union
from fastapi import status
from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        raise PersistenceException("排序保存失败", code=ErrorCode.PERSISTENCE_FAILED)

        if exc.code == ErrorCode.REORDER_IN_PROGRESS:
            ...
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"
    OPERATION_FAILED = "OPERATION_FAILED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    # ==================== 认证相关 (401) ====================
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    TOO_MANY_ATTEMPTS = "TOO_MANY_ATTEMPTS"

    # ==================== 授权相关 (403) ====================
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    REGISTRATION_DISABLED = "REGISTRATION_DISABLED"

    # ==================== 资源相关 (404) ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    PROFILE_MISSING = "PROFILE_MISSING"

    # ==================== 冲突相关 (409) ====================
    RESOURCE_CONFLICT = "RESOURCE_CONFLICT"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    REORDER_IN_PROGRESS = "REORDER_IN_PROGRESS"

    # ==================== 验证相关 (422) ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"

    # ==================== 服务相关 (503) ====================
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（ErrorCode 枚举或字符串）
        status_code: HTTP 状态码
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException("操作失败", code=ErrorCode.OPERATION_FAILED)

        raise BusinessException(
            message="数据验证失败",
            code=ErrorCode.VALIDATION_ERROR,
            details=["title 不能为空"]
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式（details/extra 为深拷贝）"""
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"status_code={self.status_code})"
        )


class AuthenticationException(BusinessException):
    """认证异常 (401)

    使用示例:
        raise AuthenticationException("Invalid email or password.", code=ErrorCode.INVALID_CREDENTIALS)
    """

    def __init__(
        self,
        message: str = "认证失败",
        code: ErrorCodeType = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            **extra
        )


class AuthorizationException(BusinessException):
    """授权异常 (403)"""

    def __init__(
        self,
        message: str = "权限不足",
        code: ErrorCodeType = ErrorCode.AUTHORIZATION_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            **extra
        )


class ResourceNotFoundException(BusinessException):
    """资源不存在异常 (404)

    使用示例:
        raise ResourceNotFoundException("项目不存在", resource_type="projects", resource_id=12)
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            **extra
        )


class ResourceConflictException(BusinessException):
    """资源冲突异常 (409)"""

    def __init__(
        self,
        message: str = "资源冲突",
        code: ErrorCodeType = ErrorCode.RESOURCE_CONFLICT,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            **extra
        )


class ReorderInProgressException(ResourceConflictException):
    """排序写入进行中时再次发起移动操作 (409)

    同一个排序控制器在远端写入完成之前拒绝新的移动请求，不排队。
    """

    def __init__(
        self,
        message: str = "排序正在保存中，请稍后再试",
        code: ErrorCodeType = ErrorCode.REORDER_IN_PROGRESS,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class ValidationException(BusinessException):
    """数据验证异常 (422)

    使用示例:
        raise ValidationException("未知的内容分类", code=ErrorCode.UNKNOWN_CATEGORY, category="foo")
    """

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=422,
            details=details,
            **extra
        )


class ServiceUnavailableException(BusinessException):
    """服务不可用异常 (503)"""

    def __init__(
        self,
        message: str = "服务暂时不可用",
        code: ErrorCodeType = ErrorCode.SERVICE_UNAVAILABLE,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            **extra
        )


class PersistenceException(ServiceUnavailableException):
    """内容库写入失败 (503)

    连接、权限、约束、记录缺失等任何写入错误都包装为此异常，
    排序控制器捕获后回滚本地状态并重新抛出。
    """

    def __init__(
        self,
        message: str = "数据保存失败",
        code: ErrorCodeType = ErrorCode.PERSISTENCE_FAILED,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class Err:
    """异常快捷创建类

    使用示例:
        from folio.exceptions import Err

        raise Err.auth("Invalid email or password.")
        raise Err.forbidden("需要管理员权限")
        raise Err.not_found("博客不存在", slug="hello-world")
        raise Err.invalid("未知的内容分类", code=ErrorCode.UNKNOWN_CATEGORY)
        raise Err.persistence("排序保存失败")
    """

    @staticmethod
    def auth(message: str = "认证失败", **kwargs) -> AuthenticationException:
        """认证失败 (401)"""
        return AuthenticationException(message, **kwargs)

    @staticmethod
    def forbidden(message: str = "权限不足", **kwargs) -> AuthorizationException:
        """权限不足 (403)"""
        return AuthorizationException(message, **kwargs)

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> ResourceNotFoundException:
        """资源不存在 (404)"""
        return ResourceNotFoundException(message, **kwargs)

    @staticmethod
    def conflict(message: str = "资源冲突", **kwargs) -> ResourceConflictException:
        """资源冲突 (409)"""
        return ResourceConflictException(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        """数据验证失败 (422)"""
        return ValidationException(message, **kwargs)

    @staticmethod
    def unavailable(message: str = "服务暂时不可用", **kwargs) -> ServiceUnavailableException:
        """服务不可用 (503)"""
        return ServiceUnavailableException(message, **kwargs)

    @staticmethod
    def persistence(message: str = "数据保存失败", **kwargs) -> PersistenceException:
        """内容库写入失败 (503)"""
        return PersistenceException(message, **kwargs)

    @staticmethod
    def fail(message: str = "操作失败", **kwargs) -> BusinessException:
        """通用业务异常 (400)"""
        return BusinessException(message, **kwargs)
