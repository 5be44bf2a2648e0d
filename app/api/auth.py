"""인증 라우터 — 회원가입, 로그인, 로그아웃.

Auth Router — Registration, login and logout endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.schemas.common import ApiResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/v1/register", response_model=ApiResponse[RegisterResponse], status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[RegisterResponse]:
    """회원가입 — ROLE_USER 계정 생성.

    Register a new user. Duplicate email → 409.
    """
    result: RegisterResponse = await auth_service.register(db, data)
    await db.commit()
    return ApiResponse(data=result, message="User registered successfully")


@router.post("/v1/login", response_model=ApiResponse[LoginResponse])
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[LoginResponse]:
    """로그인 — JWT 토큰과 사용자 프로필 반환.

    Login endpoint. Returns a bearer token and the user's profile.
    """
    result: LoginResponse = await auth_service.login(db, data)
    return ApiResponse(data=result, message="Logged in successfully")


@router.post("/logout", status_code=204)
async def logout() -> None:
    """로그아웃 — JWT는 클라이언트에서 폐기합니다.

    Logout endpoint. Tokens are stateless; the client discards its token.
    """
    return None
