"""게시글 API 테스트 — 공개 조회, 작성, 수정, 읽음 처리, 삭제.

Post API tests — Public listing/reading and creator-scoped CRUD, including
visibility of inactive posts and ownership checks.
"""

from datetime import datetime, timezone

from httpx import AsyncClient

from app.utils.timezone import format_display
from tests.conftest import auth_header, create_post

POSTS = "/api/v1/posts"
OLD_TIMESTAMP = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def user_posts(user_id: int) -> str:
    return f"/api/v1/users/{user_id}/posts"


# ===== Public listing =====

class TestListPosts:
    """게시글 목록 테스트."""

    async def test_list_active_only(self, client: AsyncClient, db, regular_user):
        """비활성 게시글은 공개 목록에서 제외."""
        await create_post(db, regular_user, name="Visible")
        await create_post(db, regular_user, name="Hidden", active=False)

        res = await client.get(POSTS)
        assert res.status_code == 200
        names = [p["name"] for p in res.json()["data"]]
        assert names == ["Visible"]

    async def test_list_newest_first(self, client: AsyncClient, db, regular_user):
        await create_post(db, regular_user, name="Older")
        await create_post(db, regular_user, name="Newer")

        res = await client.get(POSTS)
        names = [p["name"] for p in res.json()["data"]]
        assert names == ["Newer", "Older"]

    async def test_list_embeds_creator(self, client: AsyncClient, db, regular_user):
        """작성자 요약 포함, camelCase 필드."""
        await create_post(db, regular_user)

        res = await client.get(POSTS)
        post = res.json()["data"][0]
        assert set(post) == {"id", "name", "message", "read", "active", "createdAt", "updatedAt", "creator"}
        assert post["creator"] == {"id": regular_user.id, "name": "Jane Doe", "email": "jane@test.com"}
        assert post["read"] is False
        assert post["active"] is True

    async def test_list_empty(self, client: AsyncClient):
        res = await client.get(POSTS)
        assert res.status_code == 200
        assert res.json()["data"] == []


# ===== Single post =====

class TestGetPost:
    """게시글 상세 조회 테스트."""

    async def test_get_active_post_anonymous(self, client: AsyncClient, db, regular_user):
        post = await create_post(db, regular_user)
        res = await client.get(f"{POSTS}/{post.id}")
        assert res.status_code == 200
        assert res.json()["data"]["id"] == post.id

    async def test_get_inactive_post_anonymous(self, client: AsyncClient, db, regular_user):
        """비활성 게시글 — 익명 사용자는 404."""
        post = await create_post(db, regular_user, active=False)
        res = await client.get(f"{POSTS}/{post.id}")
        assert res.status_code == 404

    async def test_get_inactive_post_other_user(self, client: AsyncClient, db, regular_user, other_token):
        post = await create_post(db, regular_user, active=False)
        res = await client.get(f"{POSTS}/{post.id}", headers=auth_header(other_token))
        assert res.status_code == 404

    async def test_get_inactive_post_creator(self, client: AsyncClient, db, regular_user, user_token):
        """작성자는 비활성 게시글 조회 가능."""
        post = await create_post(db, regular_user, active=False)
        res = await client.get(f"{POSTS}/{post.id}", headers=auth_header(user_token))
        assert res.status_code == 200

    async def test_get_inactive_post_admin(self, client: AsyncClient, db, regular_user, admin_token):
        post = await create_post(db, regular_user, active=False)
        res = await client.get(f"{POSTS}/{post.id}", headers=auth_header(admin_token))
        assert res.status_code == 200

    async def test_get_missing_post(self, client: AsyncClient):
        res = await client.get(f"{POSTS}/99999")
        assert res.status_code == 404
        assert res.json() == {"success": False, "data": None, "message": "Post not found"}

    async def test_get_with_bad_token(self, client: AsyncClient, db, regular_user):
        """잘못된 토큰은 익명 취급하지 않고 401."""
        post = await create_post(db, regular_user)
        res = await client.get(f"{POSTS}/{post.id}", headers=auth_header("garbage"))
        assert res.status_code == 401


# ===== Posts by user =====

class TestUserPosts:
    """사용자별 게시글 목록 테스트."""

    async def test_public_sees_active_only(self, client: AsyncClient, db, regular_user, other_user):
        await create_post(db, regular_user, name="Mine")
        await create_post(db, regular_user, name="Mine hidden", active=False)
        await create_post(db, other_user, name="Theirs")

        res = await client.get(user_posts(regular_user.id))
        assert res.status_code == 200
        assert [p["name"] for p in res.json()["data"]] == ["Mine"]

    async def test_owner_sees_inactive(self, client: AsyncClient, db, regular_user, user_token):
        """본인은 비활성 게시글도 조회."""
        await create_post(db, regular_user, name="Mine")
        await create_post(db, regular_user, name="Mine hidden", active=False)

        res = await client.get(user_posts(regular_user.id), headers=auth_header(user_token))
        assert {p["name"] for p in res.json()["data"]} == {"Mine", "Mine hidden"}

    async def test_admin_sees_inactive(self, client: AsyncClient, db, regular_user, admin_token):
        await create_post(db, regular_user, active=False)
        res = await client.get(user_posts(regular_user.id), headers=auth_header(admin_token))
        assert len(res.json()["data"]) == 1

    async def test_unknown_user(self, client: AsyncClient):
        res = await client.get(user_posts(99999))
        assert res.status_code == 404


# ===== Create =====

class TestCreatePost:
    """게시글 작성 테스트."""

    async def test_create_post(self, client: AsyncClient, regular_user, user_token):
        """작성 성공 — 미읽음/활성 상태로 시작."""
        res = await client.post(POSTS, json={"name": "Title", "message": "Body"}, headers=auth_header(user_token))
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["name"] == "Title"
        assert data["read"] is False
        assert data["active"] is True
        assert data["creator"]["id"] == regular_user.id

    async def test_create_requires_auth(self, client: AsyncClient):
        res = await client.post(POSTS, json={"name": "Title", "message": "Body"})
        assert res.status_code == 401

    async def test_creator_id_ignored_for_user(self, client: AsyncClient, regular_user, other_user, user_token):
        """일반 사용자의 creatorId는 무시."""
        res = await client.post(POSTS, json={
            "name": "Title", "message": "Body", "creatorId": other_user.id,
        }, headers=auth_header(user_token))
        assert res.status_code == 201
        assert res.json()["data"]["creator"]["id"] == regular_user.id

    async def test_creator_id_honoured_for_admin(self, client: AsyncClient, regular_user, admin_token):
        res = await client.post(POSTS, json={
            "name": "Title", "message": "Body", "creatorId": regular_user.id,
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert res.json()["data"]["creator"]["email"] == "jane@test.com"

    async def test_message_too_long(self, client: AsyncClient, user_token):
        """1000자 초과 본문 400."""
        res = await client.post(POSTS, json={"name": "Title", "message": "x" * 1001}, headers=auth_header(user_token))
        assert res.status_code == 400

    async def test_empty_name(self, client: AsyncClient, user_token):
        res = await client.post(POSTS, json={"name": "", "message": "Body"}, headers=auth_header(user_token))
        assert res.status_code == 400


# ===== Update =====

class TestUpdatePost:
    """게시글 수정 테스트."""

    async def test_owner_updates(self, client: AsyncClient, db, regular_user, user_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={"message": "Edited"}, headers=auth_header(user_token))
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["message"] == "Edited"
        assert data["name"] == "Hello"

    async def test_other_user_forbidden(self, client: AsyncClient, db, regular_user, other_token):
        """타인의 게시글 수정 403."""
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={"message": "Hacked"}, headers=auth_header(other_token))
        assert res.status_code == 403
        assert res.json()["message"] == "You are not authorized to update this post"

    async def test_admin_updates_any(self, client: AsyncClient, db, regular_user, admin_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={"active": False}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["active"] is False

    async def test_admin_reassigns_creator(self, client: AsyncClient, db, regular_user, other_user, admin_token):
        """관리자는 작성자 변경 가능."""
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={"creatorId": other_user.id}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["creator"]["id"] == other_user.id

    async def test_admin_reassign_unknown_creator(self, client: AsyncClient, db, regular_user, admin_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={"creatorId": 99999}, headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_update_missing(self, client: AsyncClient, user_token):
        res = await client.put(f"{POSTS}/99999", json={"message": "x"}, headers=auth_header(user_token))
        assert res.status_code == 404


# ===== Read flag =====

class TestSetRead:
    """읽음 상태 변경 테스트."""

    async def test_mark_read_and_unread(self, client: AsyncClient, db, regular_user, user_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}/read", json={"read": True}, headers=auth_header(user_token))
        assert res.status_code == 200
        assert res.json()["data"]["read"] is True

        res = await client.put(f"{POSTS}/{post.id}/read", json={"read": False}, headers=auth_header(user_token))
        assert res.json()["data"]["read"] is False

    async def test_other_user_forbidden(self, client: AsyncClient, db, regular_user, other_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}/read", json={"read": True}, headers=auth_header(other_token))
        assert res.status_code == 403

    async def test_missing_body(self, client: AsyncClient, db, regular_user, user_token):
        post = await create_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}/read", json={}, headers=auth_header(user_token))
        assert res.status_code == 400


# ===== Delete =====

class TestDeletePost:
    """게시글 삭제 테스트."""

    async def test_owner_deletes(self, client: AsyncClient, db, regular_user, user_token):
        post = await create_post(db, regular_user)
        res = await client.delete(f"{POSTS}/{post.id}", headers=auth_header(user_token))
        assert res.status_code == 204

        res = await client.get(f"{POSTS}/{post.id}")
        assert res.status_code == 404

    async def test_other_user_forbidden(self, client: AsyncClient, db, regular_user, other_token):
        post = await create_post(db, regular_user)
        res = await client.delete(f"{POSTS}/{post.id}", headers=auth_header(other_token))
        assert res.status_code == 403
        assert res.json()["message"] == "You are not authorized to delete this post"

    async def test_admin_deletes_any(self, client: AsyncClient, db, regular_user, admin_token):
        post = await create_post(db, regular_user)
        res = await client.delete(f"{POSTS}/{post.id}", headers=auth_header(admin_token))
        assert res.status_code == 204

    async def test_delete_missing(self, client: AsyncClient, user_token):
        res = await client.delete(f"{POSTS}/99999", headers=auth_header(user_token))
        assert res.status_code == 404


# ===== updatedAt =====

class TestUpdatedAt:
    """수정 일시 갱신 테스트 — 값이 같아도 갱신."""

    async def _stale_post(self, db, creator):
        post = await create_post(db, creator)
        post.updated_at = OLD_TIMESTAMP
        await db.flush()
        return post

    async def test_update_same_values(self, client: AsyncClient, db, regular_user, user_token):
        post = await self._stale_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}", json={
            "name": "Hello", "message": "First message",
        }, headers=auth_header(user_token))
        assert res.status_code == 200
        assert res.json()["data"]["updatedAt"] != format_display(OLD_TIMESTAMP)

    async def test_set_read_same_value(self, client: AsyncClient, db, regular_user, user_token):
        post = await self._stale_post(db, regular_user)
        res = await client.put(f"{POSTS}/{post.id}/read", json={"read": False}, headers=auth_header(user_token))
        assert res.status_code == 200
        assert res.json()["data"]["updatedAt"] != format_display(OLD_TIMESTAMP)

    async def test_admin_activate(self, client: AsyncClient, db, regular_user, admin_token):
        post = await self._stale_post(db, regular_user)
        res = await client.put(
            f"/api/v1/admin/post/activate/{post.id}", json={"active": True}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        assert res.json()["data"]["updatedAt"] != format_display(OLD_TIMESTAMP)
