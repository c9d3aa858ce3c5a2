"""中间件模块"""

from .request_id import RequestIDMiddleware, get_request_id

__all__ = [
    "RequestIDMiddleware",
    "get_request_id",
]
