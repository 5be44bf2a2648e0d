"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database; set TEST_DATABASE_URL to run against
PostgreSQL (asyncpg) instead.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403: register all models with metadata
from app.models import ROLE_ADMIN, ROLE_USER, Post, User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _engine_kwargs(url: str) -> dict:
    # 인메모리 SQLite는 단일 커넥션을 공유해야 스키마가 유지됨
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_pre_ping": True}


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    roles: list[str] | None = None,
    is_active: bool = True,
) -> User:
    """테스트 사용자를 직접 생성합니다."""
    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        roles=roles or [ROLE_USER],
        is_active=is_active,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def create_post(
    db: AsyncSession,
    creator: User,
    name: str = "Hello",
    message: str = "First message",
    active: bool = True,
    read: bool = False,
) -> Post:
    """테스트 게시글을 직접 생성합니다."""
    post = Post(creator_id=creator.id, name=name, message=message, active=active, read=read)
    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    return await create_user(db, "Test Admin", "admin@test.com", "admin123!", [ROLE_USER, ROLE_ADMIN])


@pytest_asyncio.fixture
async def regular_user(db: AsyncSession) -> User:
    """일반 사용자를 생성합니다."""
    return await create_user(db, "Jane Doe", "jane@test.com", "jane1234!")


@pytest_asyncio.fixture
async def other_user(db: AsyncSession) -> User:
    """다른 일반 사용자를 생성합니다."""
    return await create_user(db, "John Roe", "john@test.com", "john1234!")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "username": user.email,
        "roles": user.get_roles(),
    })


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def user_token(regular_user) -> str:
    return make_token(regular_user)


@pytest.fixture
def other_token(other_user) -> str:
    return make_token(other_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
