"""관리자 게시글 라우터 — 비활성 포함 전체 게시글 관리.

Admin Post Router — Manage every post, including inactive ones.
Every route requires ROLE_ADMIN.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.post import PostActivate, PostCreate, PostResponse, PostUpdate
from app.services.post_service import post_service

router: APIRouter = APIRouter()


@router.get("/posts", response_model=ApiResponse[list[PostResponse]])
async def list_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    active: Annotated[bool | None, Query(description="활성 상태 필터")] = None,
    read: Annotated[bool | None, Query(description="읽음 상태 필터")] = None,
    creator_id: Annotated[int | None, Query(alias="creatorId", description="작성자 필터")] = None,
) -> ApiResponse[list[PostResponse]]:
    """전체 게시글 목록 (비활성 포함, 필터 선택)."""
    posts: list[PostResponse] = await post_service.list_admin(db, active, read, creator_id)
    return ApiResponse(data=posts, message="Posts retrieved successfully")


@router.get("/posts/{post_id}", response_model=ApiResponse[PostResponse])
async def get_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[PostResponse]:
    """게시글 상세 조회 (비활성 포함)."""
    post: PostResponse = await post_service.get_admin(db, post_id)
    return ApiResponse(data=post, message="Post retrieved successfully")


@router.post("/post", response_model=ApiResponse[PostResponse], status_code=201)
async def create_post(
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[PostResponse]:
    """게시글 생성 — creatorId 미지정 시 관리자 본인이 작성자."""
    post: PostResponse = await post_service.create_post(db, data, current_user)
    await db.commit()
    return ApiResponse(data=post, message="Post created successfully")


@router.put("/post/activate/{post_id}", response_model=ApiResponse[PostResponse])
async def activate_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    data: Annotated[PostActivate | None, Body()] = None,
) -> ApiResponse[PostResponse]:
    """게시글 활성 상태 설정/토글.

    Set the post's active flag from {"active": bool}, or flip it when the
    body is empty.
    """
    post: PostResponse = await post_service.set_active(db, post_id, data)
    await db.commit()
    return ApiResponse(data=post, message="Post updated successfully")


@router.put("/post/{post_id}", response_model=ApiResponse[PostResponse])
async def update_post(
    post_id: int,
    data: PostUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[PostResponse]:
    """게시글 수정 (작성자 변경 포함)."""
    post: PostResponse = await post_service.update_post(db, post_id, data, current_user)
    await db.commit()
    return ApiResponse(data=post, message="Post updated successfully")


@router.delete("/post/{post_id}", status_code=204)
async def delete_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    """게시글 삭제."""
    await post_service.delete_post(db, post_id, current_user)
    await db.commit()
