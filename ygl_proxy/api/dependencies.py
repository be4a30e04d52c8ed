"""FastAPI dependencies that hand per-app collaborators to the endpoints.

Everything lives on ``app.state`` and is built once in ``create_app``, so a
test can build an app around its own cache or upstream client.
"""

from fastapi import Request

from ygl_proxy.database.memory_cache import ResponseCache
from ygl_proxy.error_handler import ErrorHandler
from ygl_proxy.integrations.clients.real_http.ygl import YGLClient
from ygl_proxy.utils.config_loader import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> ResponseCache:
    """Dependency for the response cache"""
    return request.app.state.cache


def get_ygl_client(request: Request) -> YGLClient:
    """Dependency for the upstream YGL client"""
    return request.app.state.ygl_client


def get_error_handler(request: Request) -> ErrorHandler:
    return request.app.state.error_handler
