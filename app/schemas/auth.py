"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers registration, login and the issued token payload.
"""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel
from app.schemas.user import UserName, UserProfileResponse


class RegisterRequest(CamelModel):
    """회원가입 요청 스키마.

    Self-registration request schema. Creates a ROLE_USER account.

    Attributes:
        name: 표시 이름 (Display name, 3-100 chars)
        email: 로그인 이메일 (Login email, must be unique)
        password: 비밀번호 (Plain text, at least 8 chars, bcrypt-hashed on server)
    """

    name: UserName
    email: EmailStr
    password: str = Field(min_length=8)


class LoginRequest(CamelModel):
    """로그인 요청 스키마.

    Login request schema.
    """

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterResponse(CamelModel):
    """회원가입 응답 데이터 — 생성된 사용자 프로필."""

    user: UserProfileResponse


class LoginResponse(CamelModel):
    """로그인 응답 데이터 — JWT 토큰과 사용자 프로필.

    Login payload: the bearer token and the logged-in user's profile.
    """

    token: str
    user: UserProfileResponse
