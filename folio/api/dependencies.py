"""路由共用依赖，从 app.state 读取应用级对象"""

from fastapi import Request

from folio.aggregator import ContentAggregator
from folio.config import AppSettings
from folio.content import ContentStore
from folio.exceptions import Err
from folio.uploads import LocalUploadStorage


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_aggregator(request: Request) -> ContentAggregator:
    return request.app.state.aggregator


def get_store(request: Request) -> ContentStore:
    """管理端使用的内容库，未配置时 503"""
    store = request.app.state.store
    if store is None:
        raise Err.unavailable("内容库未配置，当前使用示例内容")
    return store


def get_upload_storage(request: Request) -> LocalUploadStorage:
    return request.app.state.upload_storage
