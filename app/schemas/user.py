"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User-related Pydantic request/response schema definitions.

Serialization groups:
    - user:read  → UserProfileResponse (본인 프로필, own profile)
    - admin:read → UserAdminResponse (관리자 화면, admin views)
"""

from typing import Annotated

from pydantic import AliasChoices, EmailStr, Field, StringConstraints

from app.schemas.common import CamelModel

# 표시 이름: 앞뒤 공백 제거 후 3~100자 (Trimmed before the length check)
UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=100)]


class UserProfileResponse(CamelModel):
    """본인 프로필 응답 스키마 (user:read 그룹).

    Profile response schema used for the caller's own account and for
    register/login payloads. Hides id, updatedAt and isActive.
    """

    name: str
    email: str
    roles: list[str]
    created_at: str  # "YYYY-MM-DD HH:MM:SS" 표시 시간대 (Display timezone)


class UserAdminResponse(CamelModel):
    """관리자용 사용자 응답 스키마 (admin:read 그룹).

    Admin user response schema exposing every public user field.
    """

    id: int
    name: str
    email: str
    roles: list[str]
    created_at: str
    updated_at: str
    is_active: bool


class ProfileUpdate(CamelModel):
    """본인 프로필 수정 요청 스키마 (부분 업데이트).

    Own profile update request (partial update).
    Changing the password requires the current password.

    Attributes:
        name: 표시 이름 (New display name, optional)
        email: 이메일 (New email, optional)
        password: 새 비밀번호 (New password, optional)
        current_password: 현재 비밀번호 (Required when password is set)
    """

    name: UserName | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    current_password: str | None = None


class UserCreate(CamelModel):
    """관리자 사용자 생성 요청 스키마.

    Admin user creation request schema.

    Attributes:
        name: 표시 이름 (Display name)
        email: 로그인 이메일 (Login email, unique)
        password: 초기 비밀번호 (Initial password, bcrypt-hashed on server)
        roles: 부여할 역할 (Granted roles, defaults to ROLE_USER)
        is_active: 활성 상태 (Active flag, default True)
    """

    name: UserName
    email: EmailStr
    password: str = Field(min_length=8)
    roles: list[str] | None = None
    is_active: bool = True


class UserUpdate(CamelModel):
    """관리자 사용자 수정 요청 스키마 (부분 업데이트).

    Admin user update request schema (partial update).
    """

    name: UserName | None = None
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)
    roles: list[str] | None = None
    is_active: bool | None = None


class UserActivate(CamelModel):
    """사용자 활성화 요청 스키마.

    Optional body for the activate endpoint ({"isActive": bool} or
    {"active": bool}, as for posts). Without a value the
    account's active flag is toggled.
    """

    is_active: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("isActive", "is_active", "active"),
    )
