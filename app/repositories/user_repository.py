"""사용자 레포지토리 — 사용자 CRUD 및 이메일 조회 쿼리.

User Repository — CRUD and lookup queries for users.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다 (대소문자 무시).

        Retrieve a user by email. Emails are stored lower-cased, so the
        lookup value is normalized the same way.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = select(User).where(User.email == email.strip().lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_users(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
    ) -> list[User]:
        """사용자 목록을 생성 순으로 조회합니다.

        List users ordered by creation, optionally filtered by active flag.
        """
        users = await self.get_all(
            db,
            filters={"is_active": is_active},
            order_by=(User.created_at, User.id),
        )
        return list(users)


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
