"""초기 데이터 시드 스크립트 — 관리자 계정 생성.

Seed script — Creates the initial administrator account.
Run this script once to bootstrap the database.

Usage:
    python -m app.seed

Creates:
    - 1개 관리자 계정: ADMIN_EMAIL / ADMIN_PASSWORD (ROLE_ADMIN, from settings)
"""

import asyncio
import logging

from app.config import settings
from app.database import async_session, engine, Base
from app.models import ROLE_ADMIN, ROLE_USER, User
from app.repositories.user_repository import user_repository
from app.services.user_service import user_service

logger: logging.Logger = logging.getLogger(__name__)


async def seed() -> User:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the admin account.

    Idempotent: 관리자 이메일이 이미 있으면 건너뜁니다 (Skips when the admin email exists).
    """
    # 테이블 생성: DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        existing: User | None = await user_repository.get_by_email(db, settings.ADMIN_EMAIL)
        if existing is not None:
            logger.info("Already seeded (%s). Skipping.", existing.email)
            return existing

        admin: User = await user_service.create_user(
            db,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            roles=[ROLE_USER, ROLE_ADMIN],
        )
        await db.commit()
        logger.info("Seeded admin user id=%s email=%s", admin.id, admin.email)
        return admin


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    asyncio.run(seed())
