"""게시글 레포지토리 — 게시글 CRUD 및 작성자 기준 조회 쿼리.

Post Repository — CRUD and filtered listing queries for posts.
Every read eagerly loads the creator so responses can embed it.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.post import Post
from app.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """게시글 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the posts table.
    """

    def __init__(self) -> None:
        super().__init__(Post)

    def _base_query(self) -> Select:
        return select(Post).options(selectinload(Post.creator))

    async def list_posts(
        self,
        db: AsyncSession,
        active: bool | None = None,
        read: bool | None = None,
        creator_id: int | None = None,
    ) -> list[Post]:
        """게시글 목록을 최신순으로 조회합니다.

        List posts newest first. None filters are ignored.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            active: 활성 상태 필터 (Active flag filter)
            read: 읽음 상태 필터 (Read flag filter)
            creator_id: 작성자 필터 (Creator filter)

        Returns:
            list[Post]: 작성자가 로드된 게시글 목록 (Posts with creator loaded)
        """
        posts = await self.get_all(
            db,
            filters={"active": active, "read": read, "creator_id": creator_id},
            order_by=(Post.created_at.desc(), Post.id.desc()),
        )
        return list(posts)

    async def reload(self, db: AsyncSession, post: Post) -> Post:
        """작성자 관계를 포함해 게시글을 다시 읽어옵니다.

        Re-read a post after a write so the creator relationship reflects
        the current creator_id.
        """
        await db.refresh(post, attribute_names=["creator"])
        return post


# 싱글턴 인스턴스: Singleton instance
post_repository: PostRepository = PostRepository()
