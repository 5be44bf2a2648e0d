"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and authorization.
Provides reusable dependencies for extracting the current user from a JWT
and enforcing role-gated access on API endpoints.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    4. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
    5. 사용자 활성 상태를 확인 (User active status is verified)

Authorization Flow (require_role):
    ROLE_ADMIN은 ROLE_USER를 포함합니다 (ROLE_ADMIN implies ROLE_USER).
    역할이 없으면 403 Forbidden 반환 (Returns 403 when the role is missing).
"""

from typing import Annotated, Callable, Awaitable

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import ROLE_ADMIN, ROLE_USER, User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기: auto_error=False: 헤더 누락 시 401은 직접 처리
# (Missing header is turned into our own 401 instead of FastAPI's 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def _resolve_user(db: AsyncSession, token: str) -> User:
    """JWT 토큰을 검증하고 해당 사용자를 반환합니다.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 사용자가 없거나 비활성
                           (Invalid token, unknown or inactive user)
    """
    try:
        payload: dict = decode_token(token)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Expired token")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")

    # 토큰 타입 검증: Only access tokens are accepted
    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")
    subject: str | None = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        raise UnauthorizedError("Invalid token")

    user: User | None = await user_repository.get_by_id(db, int(subject))
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer token and return the authenticated user.

    Raises:
        UnauthorizedError: 토큰 누락/무효/만료, 사용자 없음/비활성
                           (Missing, invalid or expired token; unknown or inactive user)
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")
    return await _resolve_user(db, credentials.credentials)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """공개 엔드포인트용 — 토큰이 있으면 사용자를, 없으면 None을 반환합니다.

    For public endpoints whose output depends on who is asking.
    No header means anonymous; a header carrying a bad token is still 401.
    """
    if credentials is None:
        return None
    return await _resolve_user(db, credentials.credentials)


def require_role(role: str) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory that creates a FastAPI dependency enforcing a role
    claim, honouring the ROLE_ADMIN > ROLE_USER hierarchy.

    Args:
        role: 필요한 역할 이름 (Required role name)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
        (FastAPI dependency function that returns User or raises 403)
    """
    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if not current_user.has_role(role):
            raise ForbiddenError("Access denied")
        return current_user
    return _check


# 편의 의존성: Pre-configured role dependencies
require_user = require_role(ROLE_USER)
require_admin = require_role(ROLE_ADMIN)
