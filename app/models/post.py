"""게시글 SQLAlchemy ORM 모델 정의.

Post SQLAlchemy ORM model definition.

Tables:
    - posts: 게시글 (Posts with read/active state flags)
"""

from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Post(Base):
    """게시글 모델.

    Post model. A post always belongs to an existing user (its creator).
    New posts start unread and active.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 제목 (Post title)
        message: 본문 (Post body, up to 1000 chars)
        read: 읽음 여부 (Read flag)
        active: 활성 여부 (Inactive posts are hidden from the public)
        creator_id: 작성자 FK (Creator user foreign key)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 작성자 FK: CASCADE: 사용자 삭제 시 게시글도 삭제
    creator_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(String(1000), nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계: Relationships
    creator = relationship("User", back_populates="posts")
