"""사용자 관련 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Roles are stored as a JSON list of role names on the user row
(e.g. ["ROLE_USER", "ROLE_ADMIN"]).

Tables:
    - users: 사용자 계정 (User accounts)
"""

from datetime import datetime, timezone
from sqlalchemy import JSON, String, Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 역할 이름: Role names used in JWT claims and route guards
ROLE_USER: str = "ROLE_USER"
ROLE_ADMIN: str = "ROLE_ADMIN"
KNOWN_ROLES: frozenset[str] = frozenset({ROLE_USER, ROLE_ADMIN})


def _default_roles() -> list[str]:
    return [ROLE_USER]


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and stored lower-cased.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 표시 이름 (Display name)
        email: 로그인 이메일 (Login email, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        roles: 역할 목록 (Granted role names, JSON)
        is_active: 활성 상태 (Inactive users cannot log in)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        posts: 작성한 게시글 목록 (Posts created by the user, cascade delete)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 로그인 이메일: 전역 고유 (Unique across all users)
    email: Mapped[str] = mapped_column(String(180), unique=True, nullable=False)
    # 비밀번호 해시: bcrypt (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=_default_roles)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    posts = relationship("Post", back_populates="creator", cascade="all, delete-orphan")

    def get_roles(self) -> list[str]:
        """부여된 역할 목록을 반환합니다 (ROLE_USER 항상 포함).

        Return granted roles; ROLE_USER is always included.
        """
        roles: list[str] = list(self.roles or [])
        if ROLE_USER not in roles:
            roles.append(ROLE_USER)
        return roles

    def has_role(self, role: str) -> bool:
        """역할 계층을 고려해 역할 보유 여부를 확인합니다.

        Check a role honouring the hierarchy (ROLE_ADMIN implies ROLE_USER).
        """
        if role == ROLE_USER:
            return True
        return role in self.get_roles()

    @property
    def is_admin(self) -> bool:
        return ROLE_ADMIN in self.get_roles()
