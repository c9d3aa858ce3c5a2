from fastapi import status
from fastapi.responses import JSONResponse
from typing import Any, Optional, List
from datetime import date, datetime
from enum import Enum
from pydantic import BaseModel, Field


class ResponseStatus(str, Enum):
    """响应状态枚举

    用于标识响应的业务状态，与 HTTP 状态码独立。
    """
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# ========== 文档响应模型 ==========

class ValidationErrorResponse(BaseModel):
    """验证错误响应模型（422），覆盖 FastAPI 默认的 422 OpenAPI Schema"""
    status: str = Field(default="error", description="响应状态")
    message: str = Field(default="请求参数验证失败", description="错误消息")
    msg_details: List[str] = Field(default=[], description="各字段验证错误详情")
    data: dict = Field(default={}, description="空数据")
    error_code: str = Field(default="VALIDATION_ERROR", description="错误码")


class BaseResponse:
    """基础响应类"""

    @staticmethod
    def _serialize_data(data: Any, _is_top_level: bool = True) -> Any:
        """递归序列化数据，处理 ORM 模型、Pydantic 模型、日期和容器

        Args:
            data: 要序列化的数据
            _is_top_level: 顶层 None 转为 {}，嵌套 None 保持为 None
        """
        if data is None:
            return {} if _is_top_level else None

        if isinstance(data, datetime):
            return data.strftime('%Y-%m-%d %H:%M:%S')
        if isinstance(data, date):
            return data.isoformat()

        if isinstance(data, BaseModel):
            return BaseResponse._serialize_data(data.model_dump(), False)

        # SQLAlchemy Row 对象
        if hasattr(data, '_mapping'):
            return {k: BaseResponse._serialize_data(v, False) for k, v in data._mapping.items()}

        if hasattr(data, 'to_dict') and callable(getattr(data, 'to_dict')):
            return BaseResponse._serialize_data(data.to_dict(), False)

        if hasattr(data, '__table__'):
            return {
                column.name: BaseResponse._serialize_data(getattr(data, column.name, None), False)
                for column in data.__table__.columns
            }

        if isinstance(data, (list, tuple)):
            return [BaseResponse._serialize_data(item, False) for item in data]

        if isinstance(data, dict):
            return {k: BaseResponse._serialize_data(v, False) for k, v in data.items()}

        return data

    @staticmethod
    def _create_response(
        message: str,
        data: Any = None,
        msg_details: Optional[List[str]] = None,
        status_code: int = status.HTTP_200_OK,
        response_status: ResponseStatus = ResponseStatus.SUCCESS
    ) -> JSONResponse:
        """创建标准化响应"""
        content = {
            "status": response_status.value,
            "message": message,
            "msg_details": msg_details if msg_details is not None else [],
            "data": BaseResponse._serialize_data(data)
        }
        return JSONResponse(status_code=status_code, content=content)


# 成功响应 (2xx)
class SuccessResponse(BaseResponse):

    @staticmethod
    def OK(data: Any = None, message: str = "请求成功") -> JSONResponse:
        """200 OK - 请求成功"""
        return BaseResponse._create_response(data=data, message=message)

    @staticmethod
    def Created(data: Any = None, message: str = "创建成功") -> JSONResponse:
        """201 Created - 创建成功"""
        return BaseResponse._create_response(
            data=data,
            message=message,
            status_code=status.HTTP_201_CREATED,
        )


class ExtendedResponse(BaseResponse):
    """扩展响应类，用于复杂的业务状态，仍遵循统一的JSON格式"""

    @staticmethod
    def Warning(message: str = "操作成功，但有警告", data: Any = None, msg_details: Optional[List[str]] = None) -> JSONResponse:
        """警告响应 - 操作成功但有警告信息"""
        return BaseResponse._create_response(
            message=message,
            data=data,
            msg_details=msg_details,
            response_status=ResponseStatus.WARNING
        )


# 客户端错误响应 (4xx)
class ClientErrorResponse(BaseResponse):

    @staticmethod
    def BadRequest(message: str = "请求参数错误", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """400 Bad Request"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_400_BAD_REQUEST,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def Unauthorized(message: str = "未授权访问", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """401 Unauthorized"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_401_UNAUTHORIZED,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def Forbidden(message: str = "禁止访问", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """403 Forbidden"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_403_FORBIDDEN,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def NotFound(message: str = "资源不存在", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """404 Not Found"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_404_NOT_FOUND,
            response_status=ResponseStatus.ERROR
        )

    @staticmethod
    def Conflict(message: str = "资源冲突", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """409 Conflict"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_409_CONFLICT,
            response_status=ResponseStatus.ERROR
        )


# 服务端错误响应 (5xx)
class ServerErrorResponse(BaseResponse):

    @staticmethod
    def InternalServerError(message: str = "服务器内部错误", msg_details: Optional[List[str]] = None) -> JSONResponse:
        """500 Internal Server Error"""
        return BaseResponse._create_response(
            message=message,
            msg_details=msg_details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            response_status=ResponseStatus.ERROR
        )


OK = SuccessResponse.OK
Created = SuccessResponse.Created
BadRequest = ClientErrorResponse.BadRequest
Unauthorized = ClientErrorResponse.Unauthorized
Forbidden = ClientErrorResponse.Forbidden
NotFound = ClientErrorResponse.NotFound
Conflict = ClientErrorResponse.Conflict
InternalServerError = ServerErrorResponse.InternalServerError
Warning = ExtendedResponse.Warning


# ==================== 响应快捷类 ====================

class Resp:
    """响应快捷类

    使用示例:
        from folio.response import Resp

        return Resp.OK(data=items)
        return Resp.Created(data=item, message="创建成功")
        return Resp.NotFound(message="Personal information not found")
    """

    OK = OK
    Created = Created
    Warning = Warning

    BadRequest = BadRequest
    Unauthorized = Unauthorized
    Forbidden = Forbidden
    NotFound = NotFound
    Conflict = Conflict

    ServerError = InternalServerError
