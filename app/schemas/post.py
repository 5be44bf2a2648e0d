"""게시글 관련 Pydantic 요청/응답 스키마 정의.

Post-related Pydantic request/response schema definitions.
Public (post:read) and admin (admin:read) views share PostResponse.
"""

from pydantic import Field

from app.schemas.common import CamelModel


class CreatorSummary(CamelModel):
    """게시글 작성자 요약 — 작성자가 없으면 Unknown/N/A 로 표시."""

    id: int | None = None
    name: str = "Unknown"
    email: str = "N/A"


class PostResponse(CamelModel):
    """게시글 응답 스키마.

    Post response schema shared by public and admin views.
    """

    id: int
    name: str
    message: str
    read: bool
    active: bool
    created_at: str  # "YYYY-MM-DD HH:MM:SS" 표시 시간대 (Display timezone)
    updated_at: str
    creator: CreatorSummary


class PostCreate(CamelModel):
    """게시글 생성 요청 스키마.

    Post creation request schema. creator_id is only honoured for admins;
    for everyone else the caller becomes the creator.

    Attributes:
        name: 제목 (Title)
        message: 본문 (Body, up to 1000 chars)
        creator_id: 작성자 ID (Creator user id, admin only)
    """

    name: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=1000)
    creator_id: int | None = None


class PostUpdate(CamelModel):
    """게시글 수정 요청 스키마 (부분 업데이트).

    Post update request schema (partial update). Only supplied fields change.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    message: str | None = Field(default=None, min_length=1, max_length=1000)
    read: bool | None = None
    active: bool | None = None
    creator_id: int | None = None


class PostReadUpdate(CamelModel):
    """게시글 읽음 상태 변경 요청 스키마."""

    read: bool


class PostActivate(CamelModel):
    """게시글 활성화 요청 스키마 — active 가 없으면 현재 상태를 반전."""

    active: bool | None = None
