"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all ROLE_ADMIN endpoints into a
single router for inclusion in the FastAPI application.

Included routers:
    - users: 사용자 관리 (User management, activation)
    - posts: 게시글 관리 (Post management, activation)
"""

from fastapi import APIRouter

from app.api.admin.users import router as users_router
from app.api.admin.posts import router as posts_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(users_router, tags=["Admin Users"])
admin_router.include_router(posts_router, tags=["Admin Posts"])
