"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata, which
Alembic and relationship resolution rely on.

Modules:
    user: 사용자 (User accounts and role names)
    post: 게시글 (Posts)
"""

from app.models.user import User, ROLE_ADMIN, ROLE_USER, KNOWN_ROLES
from app.models.post import Post

__all__ = [
    "User",
    "Post",
    "ROLE_ADMIN",
    "ROLE_USER",
    "KNOWN_ROLES",
]
