"""인증 서비스 — 회원가입, 로그인, 로그아웃 비즈니스 로직.

Auth Service — Business logic for registration, login and logout.
Tokens are stateless JWTs; logout is completed by the client discarding
its token.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.user_service import user_service
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token
from app.utils.password import verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str | list[str]]:
        """JWT 토큰 페이로드를 생성합니다.

        Build the JWT payload. The client reads "roles" for its route guards.
        """
        return {
            "sub": str(user.id),
            "username": user.email,
            "roles": user.get_roles(),
        }

    def issue_token(self, user: User) -> str:
        """사용자에 대한 액세스 토큰을 발급합니다."""
        return create_access_token(self._build_jwt_payload(user))

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> RegisterResponse:
        """회원가입을 처리합니다 — ROLE_USER 계정 생성.

        Register a new ROLE_USER account.

        Raises:
            DuplicateError: 이메일이 이미 등록되어 있을 때 (Email already registered)
        """
        user: User = await user_service.create_user(
            db,
            name=data.name,
            email=str(data.email),
            password=data.password,
        )
        return RegisterResponse(user=user_service.to_profile(user))

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> LoginResponse:
        """로그인을 처리하고 JWT 토큰을 발급합니다.

        Verify credentials and issue a JWT for the user.

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정
                               (Invalid credentials or deactivated account)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")

        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        return LoginResponse(
            token=self.issue_token(user),
            user=user_service.to_profile(user),
        )


# 싱글턴 인스턴스: Singleton instance
auth_service: AuthService = AuthService()
