"""HTTP 路由

使用示例:
    from folio.api import create_public_router, create_auth_router, create_admin_router

    app.include_router(create_public_router())
    app.include_router(create_auth_router())
    app.include_router(create_admin_router())
"""

from .public_api import create_public_router
from .auth_api import create_auth_router
from .admin_api import create_admin_router

__all__ = [
    "create_public_router",
    "create_auth_router",
    "create_admin_router",
]
