"""사용자 서비스 — 사용자 CRUD, 프로필, 활성화 비즈니스 로직.

User Service — Business logic for user CRUD, profile updates and
activation. Owns the email uniqueness rule, including the race where two
writers pass the pre-check and the database constraint fires on flush.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import KNOWN_ROLES, ROLE_USER, User
from app.repositories.user_repository import user_repository
from app.schemas.user import (
    ProfileUpdate,
    UserActivate,
    UserAdminResponse,
    UserCreate,
    UserProfileResponse,
    UserUpdate,
)
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.utils.password import hash_password, verify_password
from app.utils.timezone import format_display

DUPLICATE_EMAIL_MESSAGE: str = "User with this email is already registered."


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def to_profile(self, user: User) -> UserProfileResponse:
        """사용자 모델을 프로필 응답(user:read)으로 변환합니다."""
        return UserProfileResponse(
            name=user.name,
            email=user.email,
            roles=user.get_roles(),
            created_at=format_display(user.created_at),
        )

    def to_admin(self, user: User) -> UserAdminResponse:
        """사용자 모델을 관리자 응답(admin:read)으로 변환합니다."""
        return UserAdminResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            roles=user.get_roles(),
            created_at=format_display(user.created_at),
            updated_at=format_display(user.updated_at),
            is_active=user.is_active,
        )

    def _normalize_roles(self, roles: list[str] | None) -> list[str]:
        """역할 목록을 검증하고 정규화합니다.

        Validate requested roles and normalize them: duplicates removed,
        ROLE_USER always present.

        Raises:
            BadRequestError: 알 수 없는 역할일 때 (Unknown role name)
        """
        requested: list[str] = [r.strip().upper() for r in roles or []]
        unknown: list[str] = [r for r in requested if r not in KNOWN_ROLES]
        if unknown:
            raise BadRequestError(f"Unknown role(s): {', '.join(sorted(set(unknown)))}")
        normalized: list[str] = [ROLE_USER]
        for role in requested:
            if role not in normalized:
                normalized.append(role)
        return normalized

    async def _ensure_email_available(
        self,
        db: AsyncSession,
        email: str,
        exclude_user_id: int | None = None,
    ) -> None:
        existing: User | None = await user_repository.get_by_email(db, email)
        if existing is not None and existing.id != exclude_user_id:
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)

    async def _flush_unique(self, db: AsyncSession) -> None:
        """유니크 제약 위반을 409로 변환하며 flush 합니다.

        Flush pending changes; a unique-constraint violation (concurrent
        writer took the same email) is rolled back and surfaced as 409.
        """
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)

    async def get_user(self, db: AsyncSession, user_id: int) -> User:
        """ID로 사용자를 조회합니다.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
    ) -> list[UserAdminResponse]:
        """사용자 목록을 조회합니다 (관리자용)."""
        users: list[User] = await user_repository.list_users(db, is_active)
        return [self.to_admin(u) for u in users]

    async def create_user(
        self,
        db: AsyncSession,
        name: str,
        email: str,
        password: str,
        roles: list[str] | None = None,
        is_active: bool = True,
    ) -> User:
        """새 사용자를 생성합니다.

        Create a user. Used both by self-registration and by admins.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 표시 이름 (Display name)
            email: 로그인 이메일 (Login email, stored lower-cased)
            password: 평문 비밀번호 (Plain password, bcrypt-hashed here)
            roles: 부여할 역할 (Granted roles; ROLE_USER is always added)
            is_active: 활성 상태 (Active flag)

        Returns:
            User: 생성된 사용자 (Created user)

        Raises:
            DuplicateError: 이메일이 이미 사용 중일 때 (Email already taken)
            BadRequestError: 알 수 없는 역할 (Unknown role)
        """
        normalized_email: str = email.strip().lower()
        normalized_roles: list[str] = self._normalize_roles(roles)
        await self._ensure_email_available(db, normalized_email)

        user: User = User(
            name=name,
            email=normalized_email,
            password_hash=hash_password(password),
            roles=normalized_roles,
            is_active=is_active,
        )
        db.add(user)
        await self._flush_unique(db)
        await db.refresh(user)
        return user

    async def admin_create_user(
        self,
        db: AsyncSession,
        data: UserCreate,
    ) -> UserAdminResponse:
        """관리자가 사용자를 생성합니다."""
        user: User = await self.create_user(
            db,
            name=data.name,
            email=str(data.email),
            password=data.password,
            roles=data.roles,
            is_active=data.is_active,
        )
        return self.to_admin(user)

    async def _apply_update(
        self,
        db: AsyncSession,
        user: User,
        update_data: dict[str, Any],
    ) -> User:
        """공통 사용자 필드 업데이트 — 이메일 중복, 비밀번호 해싱 처리.

        Apply a partial update; handles email uniqueness and password hashing.
        """
        values: dict[str, Any] = {}
        if update_data.get("name") is not None:
            values["name"] = update_data["name"]
        if update_data.get("email") is not None:
            email: str = str(update_data["email"]).strip().lower()
            if email != user.email:
                await self._ensure_email_available(db, email, exclude_user_id=user.id)
            values["email"] = email
        if update_data.get("password") is not None:
            values["password_hash"] = hash_password(update_data["password"])
        if update_data.get("roles") is not None:
            values["roles"] = self._normalize_roles(update_data["roles"])
        if update_data.get("is_active") is not None:
            values["is_active"] = update_data["is_active"]

        for field, value in values.items():
            setattr(user, field, value)
        user.updated_at = datetime.now(timezone.utc)
        await self._flush_unique(db)
        await db.refresh(user)
        return user

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        data: ProfileUpdate,
    ) -> UserProfileResponse:
        """본인 프로필을 수정합니다.

        Update the caller's own profile. Roles and active flag cannot be
        changed here, and a new password requires the current one.

        Raises:
            BadRequestError: 현재 비밀번호가 없거나 틀렸을 때
                             (Current password missing or wrong)
            DuplicateError: 이메일이 이미 사용 중일 때 (Email already taken)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if update_data.get("password") is not None:
            current: str | None = update_data.get("current_password")
            if not current or not verify_password(current, user.password_hash):
                raise BadRequestError("Current password is incorrect")

        update_data.pop("current_password", None)
        updated: User = await self._apply_update(db, user, update_data)
        return self.to_profile(updated)

    async def admin_update_user(
        self,
        db: AsyncSession,
        user_id: int,
        data: UserUpdate,
        caller: User,
    ) -> UserAdminResponse:
        """관리자가 사용자 정보를 수정합니다.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 본인 계정을 비활성화하려 할 때 (Self-deactivation)
        """
        user: User = await self.get_user(db, user_id)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if user.id == caller.id and update_data.get("is_active") is False:
            raise BadRequestError("You cannot deactivate your own account")
        updated: User = await self._apply_update(db, user, update_data)
        return self.to_admin(updated)

    async def set_active(
        self,
        db: AsyncSession,
        user_id: int,
        data: UserActivate | None,
        caller: User,
    ) -> UserAdminResponse:
        """사용자 활성 상태를 설정하거나 토글합니다.

        Set the user's active flag, or toggle it when no value is given.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 본인 계정을 비활성화하려 할 때 (Self-deactivation)
        """
        user: User = await self.get_user(db, user_id)
        target: bool
        if data is not None and data.is_active is not None:
            target = data.is_active
        else:
            target = not user.is_active

        if user.id == caller.id and not target:
            raise BadRequestError("You cannot deactivate your own account")

        updated: User = await user_repository.update(db, user, {"is_active": target})
        return self.to_admin(updated)

    async def delete_user(
        self,
        db: AsyncSession,
        user_id: int,
        caller: User,
    ) -> None:
        """사용자를 삭제합니다 — 작성한 게시글도 함께 삭제됩니다.

        Delete a user together with their posts.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 본인 계정을 삭제하려 할 때 (Self-deletion)
        """
        user: User = await self.get_user(db, user_id)
        if user.id == caller.id:
            raise BadRequestError("You cannot delete your own account")
        await user_repository.delete(db, user)


# 싱글턴 인스턴스: Singleton instance
user_service: UserService = UserService()
