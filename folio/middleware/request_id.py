"""请求ID中间件

使用纯 ASGI 中间件而非 BaseHTTPMiddleware：后者在 call_next 时创建新的任务上下文，
ContextVar 的修改无法传播回来，会导致请求作用域的 session 清理失败。
"""

from folio.orm.db_session import db_manager, on_request_end


class RequestIDMiddleware:
    """请求ID中间件（纯 ASGI 实现）

    为每个请求生成唯一ID，写入 request.state.request_id 和 X-Request-ID 响应头，
    请求结束时清理数据库 session。

    使用示例:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = dict(scope.get("headers") or []).get(b"x-request-id")
        request_id = db_manager._set_request_id(incoming.decode("latin-1")[:64] if incoming else None)
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            on_request_end()


def get_request_id() -> str:
    return db_manager._get_request_id()
