"""클라이언트 세션 상태 — 토큰 저장소 및 인증 세션.

Client session state: where the access token (and the cached login user)
is kept between calls, and helpers reading roles/expiry from the token.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

import jwt

from app.schemas.user import UserProfileResponse

TOKEN_KEY: str = "access_token"
USER_KEY: str = "user"


class TokenStore(Protocol):
    """키-값 토큰 저장소 인터페이스 (브라우저 localStorage 대응)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryTokenStore:
    """프로세스 메모리 저장소 — Process-local store, lost on exit."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class FileTokenStore:
    """JSON 파일 저장소 — 세션을 파일에 유지.

    JSON file backed store, so a CLI session survives between runs.
    The file is created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path: Path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            items: Any = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            # 손상된 파일은 빈 저장소로 취급 (Unreadable file reads as an empty store)
            return {}
        return items if isinstance(items, dict) else {}

    def _dump(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        items: dict[str, str] = self._load()
        items[key] = value
        self._dump(items)

    def remove(self, key: str) -> None:
        items: dict[str, str] = self._load()
        if items.pop(key, None) is not None:
            self._dump(items)


class AuthSession:
    """인증 세션 — 토큰 보관 및 역할/만료 확인.

    Holds the bearer token and the logged-in user. Claims are read without
    signature verification; the server stays the authority.
    """

    def __init__(self, store: TokenStore | None = None) -> None:
        self.store: TokenStore = store if store is not None else MemoryTokenStore()

    def set_token(self, token: str) -> None:
        self.store.set(TOKEN_KEY, token)

    def get_token(self) -> str | None:
        return self.store.get(TOKEN_KEY)

    def _claims(self) -> dict[str, Any] | None:
        token: str | None = self.get_token()
        if not token:
            return None
        try:
            return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
        except jwt.InvalidTokenError:
            return None

    def is_token_expired(self) -> bool:
        """토큰이 없거나 만료되었으면 True."""
        claims: dict[str, Any] | None = self._claims()
        if claims is None:
            return True
        exp: Any = claims.get("exp")
        if exp is None:
            return False
        return datetime.now(timezone.utc).timestamp() >= float(exp)

    def is_authenticated(self) -> bool:
        """토큰이 있고 만료되지 않았는지 확인합니다."""
        return self.get_token() is not None and not self.is_token_expired()

    def get_roles(self) -> list[str]:
        claims: dict[str, Any] | None = self._claims()
        if claims is None:
            return []
        return list(claims.get("roles") or [])

    def has_role(self, role: str) -> bool:
        return role in self.get_roles()

    def set_user(self, user: UserProfileResponse) -> None:
        self.store.set(USER_KEY, user.model_dump_json(by_alias=True))

    def get_user(self) -> UserProfileResponse | None:
        """로그인 시 캐시한 사용자 프로필 (Cached login user, if any)."""
        raw: str | None = self.store.get(USER_KEY)
        if raw is None:
            return None
        return UserProfileResponse.model_validate_json(raw)

    def logout(self) -> None:
        """토큰과 캐시된 사용자를 삭제합니다."""
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)
