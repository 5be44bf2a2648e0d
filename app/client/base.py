"""HTTP 전송 계층 — httpx 기반 API 클라이언트.

HTTP transport for the client services. Attaches the bearer token,
unwraps the {"success", "data", "message"} envelope and turns non-2xx
responses into ApiError.
"""

import json
from typing import Any

import httpx

from app.client.errors import ApiError
from app.client.session import AuthSession

# 토큰을 붙이지 않는 공개 경로: Endpoints called without a bearer token
_PUBLIC_SUFFIXES: tuple[str, ...] = ("/login", "/register")


def _envelope_message(response: httpx.Response) -> str:
    try:
        payload: Any = response.json()
    except json.JSONDecodeError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        message: Any = payload.get("message") or payload.get("detail")
        if message:
            return str(message)
    return response.reason_phrase


class ApiClient:
    """PMP API용 동기 HTTP 클라이언트.

    Synchronous client for the PMP API.

    Args:
        base_url: 서버 주소 (Server base URL, e.g. "http://localhost:8000")
        session: 인증 세션 (Session holding the bearer token)
        http: 사용할 httpx 클라이언트 (Optional preconfigured httpx.Client,
              e.g. with a MockTransport in tests)
    """

    def __init__(
        self,
        base_url: str,
        session: AuthSession | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.session: AuthSession = session if session is not None else AuthSession()
        self._http: httpx.Client = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _headers(self, path: str) -> dict[str, str]:
        if path.endswith(_PUBLIC_SUFFIXES):
            return {}
        token: str | None = self.session.get_token()
        if token is None:
            return {}
        # 만료된 토큰은 폐기: Expired tokens are dropped instead of sent
        if self.session.is_token_expired():
            self.session.logout()
            return {}
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """요청을 보내고 엔벨로프의 data를 반환합니다.

        Send a request and return the envelope's data (None for 204).

        Raises:
            ApiError: 2xx 이외의 응답 (Non-2xx response)
        """
        if params is not None:
            params = {k: _query_value(v) for k, v in params.items() if v is not None}
        response: httpx.Response = self._http.request(
            method,
            path,
            json=json_body,
            params=params,
            headers=self._headers(path),
        )
        if response.is_error:
            raise ApiError(response.status_code, _envelope_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json().get("data")


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
