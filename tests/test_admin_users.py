"""관리자 사용자 API 테스트 — 목록, 생성, 수정, 활성화, 삭제.

Admin user API tests — Listing, creation with roles, partial updates,
activation toggling and deletion (cascading to posts).
"""

from datetime import datetime, timezone

from httpx import AsyncClient

from app.utils.timezone import format_display
from tests.conftest import auth_header, create_post

ADMIN = "/api/v1/admin"
OLD_TIMESTAMP = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestAdminListUsers:
    """사용자 목록 테스트."""

    async def test_list(self, client: AsyncClient, admin_user, regular_user, admin_token):
        """admin:read 필드 전체 노출."""
        res = await client.get(f"{ADMIN}/users", headers=auth_header(admin_token))
        assert res.status_code == 200
        users = res.json()["data"]
        assert [u["email"] for u in users] == ["admin@test.com", "jane@test.com"]
        assert set(users[0]) == {"id", "name", "email", "roles", "createdAt", "updatedAt", "isActive"}

    async def test_filter_inactive(self, client: AsyncClient, db, regular_user, other_user, admin_token):
        other_user.is_active = False
        await db.flush()

        res = await client.get(f"{ADMIN}/users", params={"isActive": "false"}, headers=auth_header(admin_token))
        assert [u["email"] for u in res.json()["data"]] == ["john@test.com"]

    async def test_user_forbidden(self, client: AsyncClient, user_token):
        res = await client.get(f"{ADMIN}/users", headers=auth_header(user_token))
        assert res.status_code == 403

    async def test_get_user(self, client: AsyncClient, regular_user, admin_token):
        res = await client.get(f"{ADMIN}/users/{regular_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["id"] == regular_user.id
        assert res.json()["data"]["isActive"] is True

    async def test_get_missing(self, client: AsyncClient, admin_token):
        res = await client.get(f"{ADMIN}/users/99999", headers=auth_header(admin_token))
        assert res.status_code == 404
        assert res.json()["message"] == "User not found"


class TestAdminCreateUser:
    """사용자 생성 테스트."""

    async def test_create_admin(self, client: AsyncClient, admin_token):
        """ROLE_ADMIN 부여 — ROLE_USER 자동 포함."""
        res = await client.post(f"{ADMIN}/user", json={
            "name": "Second Admin",
            "email": "second@test.com",
            "password": "password123",
            "roles": ["ROLE_ADMIN"],
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["roles"] == ["ROLE_USER", "ROLE_ADMIN"]
        assert data["isActive"] is True

    async def test_create_inactive(self, client: AsyncClient, admin_token):
        res = await client.post(f"{ADMIN}/user", json={
            "name": "Dormant",
            "email": "dormant@test.com",
            "password": "password123",
            "isActive": False,
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert res.json()["data"]["isActive"] is False

        login = await client.post("/api/v1/login", json={"email": "dormant@test.com", "password": "password123"})
        assert login.status_code == 401

    async def test_create_duplicate(self, client: AsyncClient, regular_user, admin_token):
        res = await client.post(f"{ADMIN}/user", json={
            "name": "Jane Again", "email": "jane@test.com", "password": "password123",
        }, headers=auth_header(admin_token))
        assert res.status_code == 409

    async def test_create_unknown_role(self, client: AsyncClient, admin_token):
        """알 수 없는 역할 400."""
        res = await client.post(f"{ADMIN}/user", json={
            "name": "Weird", "email": "weird@test.com", "password": "password123",
            "roles": ["ROLE_SUPERUSER"],
        }, headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_create_blank_name(self, client: AsyncClient, admin_token):
        """공백만 있는 이름 400."""
        res = await client.post(f"{ADMIN}/user", json={
            "name": "     ", "email": "blank@test.com", "password": "password123",
        }, headers=auth_header(admin_token))
        assert res.status_code == 400


class TestAdminUpdateUser:
    """사용자 수정 테스트."""

    async def test_promote(self, client: AsyncClient, regular_user, admin_token):
        res = await client.put(f"{ADMIN}/user/{regular_user.id}", json={
            "roles": ["ROLE_USER", "ROLE_ADMIN"],
        }, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert "ROLE_ADMIN" in res.json()["data"]["roles"]

    async def test_rename_and_reset_password(self, client: AsyncClient, regular_user, admin_token):
        res = await client.put(f"{ADMIN}/user/{regular_user.id}", json={
            "name": "Jane Renamed", "password": "resetpass1",
        }, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["name"] == "Jane Renamed"

        login = await client.post("/api/v1/login", json={"email": "jane@test.com", "password": "resetpass1"})
        assert login.status_code == 200

    async def test_email_taken(self, client: AsyncClient, regular_user, other_user, admin_token):
        res = await client.put(f"{ADMIN}/user/{regular_user.id}", json={
            "email": "john@test.com",
        }, headers=auth_header(admin_token))
        assert res.status_code == 409

    async def test_cannot_deactivate_self(self, client: AsyncClient, admin_user, admin_token):
        """관리자 본인 비활성화 금지."""
        res = await client.put(f"{ADMIN}/user/{admin_user.id}", json={"isActive": False}, headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_blank_name(self, client: AsyncClient, regular_user, admin_token):
        res = await client.put(f"{ADMIN}/user/{regular_user.id}", json={"name": "   "}, headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_updated_at_moves(self, client: AsyncClient, db, regular_user, admin_token):
        """같은 값으로 수정해도 updatedAt 갱신."""
        regular_user.updated_at = OLD_TIMESTAMP
        await db.flush()

        res = await client.put(f"{ADMIN}/user/{regular_user.id}", json={"name": "Jane Doe"}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["updatedAt"] != format_display(OLD_TIMESTAMP)

    async def test_update_missing(self, client: AsyncClient, admin_token):
        res = await client.put(f"{ADMIN}/user/99999", json={"name": "Ghost"}, headers=auth_header(admin_token))
        assert res.status_code == 404


class TestAdminActivateUser:
    """사용자 활성화 토글 테스트."""

    async def test_toggle(self, client: AsyncClient, regular_user, admin_token):
        url = f"{ADMIN}/user/activate/{regular_user.id}"
        res = await client.put(url, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["data"]["isActive"] is False

        res = await client.put(url, headers=auth_header(admin_token))
        assert res.json()["data"]["isActive"] is True

    async def test_explicit_value(self, client: AsyncClient, regular_user, admin_token):
        res = await client.put(
            f"{ADMIN}/user/activate/{regular_user.id}", json={"isActive": True}, headers=auth_header(admin_token)
        )
        assert res.json()["data"]["isActive"] is True

    async def test_deactivated_user_token_rejected(self, client: AsyncClient, regular_user, user_token, admin_token):
        """비활성화 즉시 기존 토큰 거부."""
        await client.put(f"{ADMIN}/user/activate/{regular_user.id}", headers=auth_header(admin_token))
        res = await client.get("/api/users/me", headers=auth_header(user_token))
        assert res.status_code == 401

    async def test_active_key_accepted(self, client: AsyncClient, regular_user, admin_token):
        """게시글과 같은 {"active": bool} 본문도 허용."""
        url = f"{ADMIN}/user/activate/{regular_user.id}"
        for _ in range(2):
            res = await client.put(url, json={"active": False}, headers=auth_header(admin_token))
            assert res.status_code == 200
            assert res.json()["data"]["isActive"] is False

    async def test_cannot_toggle_self_off(self, client: AsyncClient, admin_user, admin_token):
        res = await client.put(f"{ADMIN}/user/activate/{admin_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 400


class TestAdminDeleteUser:
    """사용자 삭제 테스트."""

    async def test_delete_cascades_posts(self, client: AsyncClient, db, regular_user, admin_token):
        """사용자 삭제 시 게시글도 삭제."""
        post = await create_post(db, regular_user)
        res = await client.delete(f"{ADMIN}/user/{regular_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 204

        res = await client.get(f"{ADMIN}/users/{regular_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 404
        res = await client.get(f"{ADMIN}/posts/{post.id}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_cannot_delete_self(self, client: AsyncClient, admin_user, admin_token):
        res = await client.delete(f"{ADMIN}/user/{admin_user.id}", headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_delete_missing(self, client: AsyncClient, admin_token):
        res = await client.delete(f"{ADMIN}/user/99999", headers=auth_header(admin_token))
        assert res.status_code == 404
