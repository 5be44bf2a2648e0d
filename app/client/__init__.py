"""PMP API 클라이언트 패키지 — 세션 상태, 라우트 가드, 타입 지정 HTTP 서비스.

PMP API client package — Client-side session state, route guards and typed
HTTP services built on httpx.

Usage:
    from app.client import ApiClient, AuthSession, AuthService, PostService

    session = AuthSession()
    api = ApiClient("http://localhost:8000", session)
    AuthService(api).login("jane@example.com", "secret123")
    posts = PostService(api).list_posts()
"""

from app.client.base import ApiClient
from app.client.errors import ApiError
from app.client.guards import admin_guard, auth_guard
from app.client.services import AuthService, PostService, UserService
from app.client.session import AuthSession, FileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthService",
    "AuthSession",
    "FileTokenStore",
    "MemoryTokenStore",
    "PostService",
    "TokenStore",
    "UserService",
    "admin_guard",
    "auth_guard",
]
