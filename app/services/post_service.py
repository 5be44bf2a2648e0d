"""게시글 서비스 — 게시글 CRUD, 읽음/활성 상태, 소유권 규칙.

Post Service — Business logic for post CRUD, read/active state changes and
the ownership rules deciding who may see or modify a post:

    - 활성 게시글은 누구나 조회 가능 (Active posts are public)
    - 비활성 게시글은 작성자와 관리자만 조회 (Inactive posts: creator and admins only)
    - 수정/삭제/읽음 처리는 작성자 또는 관리자 (Mutations: creator or admin)
    - creator_id 지정은 관리자만 가능 (Only admins may choose the creator)
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.models.user import User
from app.repositories.post_repository import post_repository
from app.repositories.user_repository import user_repository
from app.schemas.post import (
    CreatorSummary,
    PostActivate,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from app.utils.exceptions import ForbiddenError, NotFoundError
from app.utils.timezone import format_display


class PostService:
    """게시글 관련 비즈니스 로직을 처리하는 서비스.

    Service handling post business logic.
    """

    def to_response(self, post: Post) -> PostResponse:
        """게시글 모델을 응답 스키마로 변환합니다.

        Convert a Post (creator loaded) to its response schema.
        """
        creator: User | None = post.creator
        summary: CreatorSummary = (
            CreatorSummary(id=creator.id, name=creator.name, email=creator.email)
            if creator is not None
            else CreatorSummary()
        )
        return PostResponse(
            id=post.id,
            name=post.name or "Untitled",
            message=post.message or "",
            read=bool(post.read),
            active=bool(post.active),
            created_at=format_display(post.created_at),
            updated_at=format_display(post.updated_at),
            creator=summary,
        )

    def can_view(self, post: Post, viewer: User | None) -> bool:
        """조회 가능 여부 — 활성 게시글이거나 작성자/관리자.

        Whether the viewer may see the post.
        """
        if post.active:
            return True
        if viewer is None:
            return False
        return viewer.is_admin or post.creator_id == viewer.id

    def can_modify(self, post: Post, user: User) -> bool:
        """수정 가능 여부 — 작성자 또는 관리자."""
        return user.is_admin or post.creator_id == user.id

    async def _get_post(self, db: AsyncSession, post_id: int) -> Post:
        post: Post | None = await post_repository.get_by_id(db, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def _get_owned_post(
        self,
        db: AsyncSession,
        post_id: int,
        user: User,
        action: str,
    ) -> Post:
        """수정 대상 게시글 조회 — 존재 확인 후 소유권 확인.

        Load a post for mutation: 404 when missing, then 403 when the
        caller is neither its creator nor an admin.
        """
        post: Post = await self._get_post(db, post_id)
        if not self.can_modify(post, user):
            raise ForbiddenError(f"You are not authorized to {action} this post")
        return post

    async def _resolve_creator(self, db: AsyncSession, creator_id: int) -> User:
        creator: User | None = await user_repository.get_by_id(db, creator_id)
        if creator is None:
            raise NotFoundError("Creator not found")
        return creator

    async def _save(
        self,
        db: AsyncSession,
        post: Post,
        values: dict[str, Any],
    ) -> PostResponse:
        updated: Post = await post_repository.update(db, post, values)
        return self.to_response(await post_repository.reload(db, updated))

    async def list_public(
        self,
        db: AsyncSession,
    ) -> list[PostResponse]:
        """활성 게시글 목록을 조회합니다 (공개)."""
        posts: list[Post] = await post_repository.list_posts(db, active=True)
        return [self.to_response(p) for p in posts]

    async def list_admin(
        self,
        db: AsyncSession,
        active: bool | None = None,
        read: bool | None = None,
        creator_id: int | None = None,
    ) -> list[PostResponse]:
        """모든 게시글 목록을 조회합니다 (관리자, 비활성 포함)."""
        posts: list[Post] = await post_repository.list_posts(
            db, active=active, read=read, creator_id=creator_id
        )
        return [self.to_response(p) for p in posts]

    async def list_by_user(
        self,
        db: AsyncSession,
        user_id: int,
        viewer: User | None,
    ) -> list[PostResponse]:
        """특정 사용자의 게시글 목록을 조회합니다.

        List a user's posts. The user themselves and admins also see
        inactive posts.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        if await user_repository.get_by_id(db, user_id) is None:
            raise NotFoundError("User not found")

        sees_all: bool = viewer is not None and (viewer.is_admin or viewer.id == user_id)
        posts: list[Post] = await post_repository.list_posts(
            db,
            active=None if sees_all else True,
            creator_id=user_id,
        )
        return [self.to_response(p) for p in posts]

    async def get_visible(
        self,
        db: AsyncSession,
        post_id: int,
        viewer: User | None,
    ) -> PostResponse:
        """게시글을 조회합니다 — 볼 수 없는 비활성 게시글은 404.

        Raises:
            NotFoundError: 없거나 볼 수 없는 게시글 (Missing or hidden post)
        """
        post: Post = await self._get_post(db, post_id)
        if not self.can_view(post, viewer):
            raise NotFoundError("Post not found")
        return self.to_response(post)

    async def get_admin(self, db: AsyncSession, post_id: int) -> PostResponse:
        """게시글을 조회합니다 (관리자, 비활성 포함)."""
        return self.to_response(await self._get_post(db, post_id))

    async def create_post(
        self,
        db: AsyncSession,
        data: PostCreate,
        user: User,
    ) -> PostResponse:
        """게시글을 생성합니다.

        Create a post. New posts start unread and active. Admins may
        attribute the post to another user through creator_id; for anyone
        else the caller is the creator.

        Raises:
            NotFoundError: 지정한 작성자가 없을 때 (Creator not found)
        """
        creator_id: int = user.id
        if user.is_admin and data.creator_id is not None:
            creator_id = (await self._resolve_creator(db, data.creator_id)).id

        post: Post = await post_repository.create(
            db,
            {
                "name": data.name,
                "message": data.message,
                "creator_id": creator_id,
                "read": False,
                "active": True,
            },
        )
        return self.to_response(await post_repository.reload(db, post))

    async def update_post(
        self,
        db: AsyncSession,
        post_id: int,
        data: PostUpdate,
        user: User,
    ) -> PostResponse:
        """게시글을 수정합니다 (부분 업데이트).

        Partially update a post. Only the creator or an admin may update it;
        creator_id is ignored for non-admins.

        Raises:
            NotFoundError: 게시글 또는 새 작성자가 없을 때 (Post or creator missing)
            ForbiddenError: 작성자/관리자가 아닐 때 (Not creator or admin)
        """
        post: Post = await self._get_owned_post(db, post_id, user, "update")
        values: dict[str, Any] = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None and k != "creator_id"
        }
        if user.is_admin and data.creator_id is not None:
            values["creator_id"] = (await self._resolve_creator(db, data.creator_id)).id
        return await self._save(db, post, values)

    async def set_read(
        self,
        db: AsyncSession,
        post_id: int,
        is_read: bool,
        user: User,
    ) -> PostResponse:
        """게시글 읽음 상태를 설정합니다.

        Raises:
            NotFoundError: 게시글이 없을 때 (Post not found)
            ForbiddenError: 작성자/관리자가 아닐 때 (Not creator or admin)
        """
        post: Post = await self._get_owned_post(db, post_id, user, "update")
        return await self._save(db, post, {"read": is_read})

    async def set_active(
        self,
        db: AsyncSession,
        post_id: int,
        data: PostActivate | None,
    ) -> PostResponse:
        """게시글 활성 상태를 설정하거나 토글합니다 (관리자).

        Set the active flag, or flip it when no value is given.
        """
        post: Post = await self._get_post(db, post_id)
        target: bool = (
            data.active if data is not None and data.active is not None else not post.active
        )
        return await self._save(db, post, {"active": target})

    async def delete_post(
        self,
        db: AsyncSession,
        post_id: int,
        user: User,
    ) -> None:
        """게시글을 삭제합니다.

        Raises:
            NotFoundError: 게시글이 없을 때 (Post not found)
            ForbiddenError: 작성자/관리자가 아닐 때 (Not creator or admin)
        """
        post: Post = await self._get_owned_post(db, post_id, user, "delete")
        await post_repository.delete(db, post)


# 싱글턴 인스턴스: Singleton instance
post_service: PostService = PostService()
