"""타입 지정 API 서비스 — 인증, 게시글, 사용자.

Typed API services. Each method maps to one endpoint and returns the
unwrapped payload as the same Pydantic schema the server responds with.
"""

from typing import Any

from pydantic import TypeAdapter

from app.client.base import ApiClient
from app.schemas.auth import LoginResponse, RegisterResponse
from app.schemas.post import PostResponse
from app.schemas.user import UserAdminResponse, UserProfileResponse

_post_list: TypeAdapter[list[PostResponse]] = TypeAdapter(list[PostResponse])
_user_list: TypeAdapter[list[UserAdminResponse]] = TypeAdapter(list[UserAdminResponse])


def _payload(**fields: Any) -> dict[str, Any]:
    """None 필드를 제외한 요청 본문 — Request body without unset fields."""
    return {k: v for k, v in fields.items() if v is not None}


class AuthService:
    """회원가입, 로그인, 로그아웃."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def register(self, name: str, email: str, password: str) -> RegisterResponse:
        data: Any = self.api.request(
            "POST", "/api/v1/register",
            json_body={"name": name, "email": email, "password": password},
        )
        return RegisterResponse.model_validate(data)

    def login(self, email: str, password: str) -> LoginResponse:
        """로그인 — 토큰과 사용자를 세션에 저장합니다.

        Log in and store the token and user in the session.
        """
        data: Any = self.api.request(
            "POST", "/api/v1/login",
            json_body={"email": email, "password": password},
        )
        result: LoginResponse = LoginResponse.model_validate(data)
        self.api.session.set_token(result.token)
        self.api.session.set_user(result.user)
        return result

    def logout(self) -> None:
        """서버에 로그아웃을 알리고 로컬 세션을 비웁니다."""
        try:
            self.api.request("POST", "/api/logout")
        finally:
            self.api.session.logout()


class PostService:
    """게시글 API (공개, 작성자, 관리자)."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_posts(self) -> list[PostResponse]:
        return _post_list.validate_python(self.api.request("GET", "/api/v1/posts"))

    def get(self, post_id: int) -> PostResponse:
        return PostResponse.model_validate(self.api.request("GET", f"/api/v1/posts/{post_id}"))

    def list_by_user(self, user_id: int) -> list[PostResponse]:
        return _post_list.validate_python(self.api.request("GET", f"/api/v1/users/{user_id}/posts"))

    def create(self, name: str, message: str, creator_id: int | None = None) -> PostResponse:
        data: Any = self.api.request(
            "POST", "/api/v1/posts",
            json_body=_payload(name=name, message=message, creatorId=creator_id),
        )
        return PostResponse.model_validate(data)

    def update(
        self,
        post_id: int,
        name: str | None = None,
        message: str | None = None,
        read: bool | None = None,
        active: bool | None = None,
        creator_id: int | None = None,
    ) -> PostResponse:
        data: Any = self.api.request(
            "PUT", f"/api/v1/posts/{post_id}",
            json_body=_payload(name=name, message=message, read=read, active=active, creatorId=creator_id),
        )
        return PostResponse.model_validate(data)

    def set_read(self, post_id: int, read: bool) -> PostResponse:
        data: Any = self.api.request("PUT", f"/api/v1/posts/{post_id}/read", json_body={"read": read})
        return PostResponse.model_validate(data)

    def delete(self, post_id: int) -> None:
        self.api.request("DELETE", f"/api/v1/posts/{post_id}")

    # -- 관리자 (ROLE_ADMIN) --------------------------------------------------

    def admin_list(
        self,
        active: bool | None = None,
        read: bool | None = None,
        creator_id: int | None = None,
    ) -> list[PostResponse]:
        data: Any = self.api.request(
            "GET", "/api/v1/admin/posts",
            params={"active": active, "read": read, "creatorId": creator_id},
        )
        return _post_list.validate_python(data)

    def admin_create(self, name: str, message: str, creator_id: int | None = None) -> PostResponse:
        data: Any = self.api.request(
            "POST", "/api/v1/admin/post",
            json_body=_payload(name=name, message=message, creatorId=creator_id),
        )
        return PostResponse.model_validate(data)

    def activate(self, post_id: int, active: bool | None = None) -> PostResponse:
        """활성 상태 설정 — active가 None이면 토글."""
        data: Any = self.api.request(
            "PUT", f"/api/v1/admin/post/activate/{post_id}",
            json_body=_payload(active=active) or None,
        )
        return PostResponse.model_validate(data)

    def admin_delete(self, post_id: int) -> None:
        self.api.request("DELETE", f"/api/v1/admin/post/{post_id}")


class UserService:
    """프로필 및 관리자 사용자 API."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def me(self) -> UserProfileResponse:
        return UserProfileResponse.model_validate(self.api.request("GET", "/api/users/me"))

    def update_me(
        self,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        current_password: str | None = None,
    ) -> UserProfileResponse:
        data: Any = self.api.request(
            "PUT", "/api/users/me",
            json_body=_payload(name=name, email=email, password=password, currentPassword=current_password),
        )
        profile: UserProfileResponse = UserProfileResponse.model_validate(data)
        self.api.session.set_user(profile)
        return profile

    # -- 관리자 (ROLE_ADMIN) --------------------------------------------------

    def list_users(self, is_active: bool | None = None) -> list[UserAdminResponse]:
        data: Any = self.api.request("GET", "/api/v1/admin/users", params={"isActive": is_active})
        return _user_list.validate_python(data)

    def get(self, user_id: int) -> UserAdminResponse:
        return UserAdminResponse.model_validate(self.api.request("GET", f"/api/v1/admin/users/{user_id}"))

    def create(
        self,
        name: str,
        email: str,
        password: str,
        roles: list[str] | None = None,
        is_active: bool = True,
    ) -> UserAdminResponse:
        data: Any = self.api.request(
            "POST", "/api/v1/admin/user",
            json_body=_payload(name=name, email=email, password=password, roles=roles, isActive=is_active),
        )
        return UserAdminResponse.model_validate(data)

    def update(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        roles: list[str] | None = None,
        is_active: bool | None = None,
    ) -> UserAdminResponse:
        data: Any = self.api.request(
            "PUT", f"/api/v1/admin/user/{user_id}",
            json_body=_payload(name=name, email=email, password=password, roles=roles, isActive=is_active),
        )
        return UserAdminResponse.model_validate(data)

    def activate(self, user_id: int, is_active: bool | None = None) -> UserAdminResponse:
        """활성 상태 설정 — is_active가 None이면 토글."""
        data: Any = self.api.request(
            "PUT", f"/api/v1/admin/user/activate/{user_id}",
            json_body=_payload(isActive=is_active) or None,
        )
        return UserAdminResponse.model_validate(data)

    def delete(self, user_id: int) -> None:
        self.api.request("DELETE", f"/api/v1/admin/user/{user_id}")
