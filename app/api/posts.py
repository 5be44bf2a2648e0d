"""게시글 라우터 — 공개 조회 및 작성자 CRUD.

Post Router — Public listing/reading and creator-scoped CRUD.
Anonymous callers only see active posts; the creator and admins also see
inactive ones. Mutations are limited to the creator or an admin.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_optional_user, require_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.post import PostCreate, PostReadUpdate, PostResponse, PostUpdate
from app.services.post_service import post_service

router: APIRouter = APIRouter()


@router.get("/v1/posts", response_model=ApiResponse[list[PostResponse]])
async def list_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[PostResponse]]:
    """활성 게시글 목록 (최신순)."""
    posts: list[PostResponse] = await post_service.list_public(db)
    return ApiResponse(data=posts, message="Posts retrieved successfully")


@router.get("/v1/posts/{post_id}", response_model=ApiResponse[PostResponse])
async def get_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> ApiResponse[PostResponse]:
    """게시글 상세 조회 — 볼 수 없는 비활성 게시글은 404."""
    post: PostResponse = await post_service.get_visible(db, post_id, viewer)
    return ApiResponse(data=post, message="Post retrieved successfully")


@router.get("/v1/users/{user_id}/posts", response_model=ApiResponse[list[PostResponse]])
async def list_user_posts(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    viewer: Annotated[User | None, Depends(get_optional_user)],
) -> ApiResponse[list[PostResponse]]:
    """특정 사용자의 게시글 목록.

    List a user's posts; inactive ones only for that user or an admin.
    """
    posts: list[PostResponse] = await post_service.list_by_user(db, user_id, viewer)
    return ApiResponse(data=posts, message="User posts retrieved successfully")


@router.post("/v1/posts", response_model=ApiResponse[PostResponse], status_code=201)
async def create_post(
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> ApiResponse[PostResponse]:
    """게시글 작성 — 작성자는 호출자 (관리자는 creatorId 지정 가능)."""
    post: PostResponse = await post_service.create_post(db, data, current_user)
    await db.commit()
    return ApiResponse(data=post, message="Post created successfully")


@router.put("/v1/posts/{post_id}", response_model=ApiResponse[PostResponse])
async def update_post(
    post_id: int,
    data: PostUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> ApiResponse[PostResponse]:
    """게시글 수정 — 작성자 또는 관리자."""
    post: PostResponse = await post_service.update_post(db, post_id, data, current_user)
    await db.commit()
    return ApiResponse(data=post, message="Post updated successfully")


@router.put("/v1/posts/{post_id}/read", response_model=ApiResponse[PostResponse])
async def set_post_read(
    post_id: int,
    data: PostReadUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> ApiResponse[PostResponse]:
    """게시글 읽음/안읽음 처리 — 작성자 또는 관리자."""
    post: PostResponse = await post_service.set_read(db, post_id, data.read, current_user)
    await db.commit()
    return ApiResponse(data=post, message="Post updated successfully")


@router.delete("/v1/posts/{post_id}", status_code=204)
async def delete_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> None:
    """게시글 삭제 — 작성자 또는 관리자."""
    await post_service.delete_post(db, post_id, current_user)
    await db.commit()
