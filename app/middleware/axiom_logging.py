"""API 요청/응답 로깅 미들웨어.

API request/response logging middleware.
Builds one structured event per request (endpoint, method, params, body,
status code, error message, duration) and ships it to Axiom. When Axiom is
not configured the same event is written to the "app.access" logger.
Sensitive fields (password, token, email) are masked before logging.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger: logging.Logger = logging.getLogger("app.access")

# 마스킹 대상 필드 패턴: Fields to mask in request bodies and query params
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|credential|email)",
    re.IGNORECASE,
)

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _error_message(body: bytes) -> str:
    """에러 응답 본문에서 message 추출 — Pull the envelope message out of an error body."""
    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    if isinstance(payload, dict):
        message: Any = payload.get("message") or payload.get("detail") or payload
        return str(message)[:500]
    return str(payload)[:500]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request and response, to Axiom when
    AXIOM_API_TOKEN and AXIOM_DATASET are set and to stdlib logging otherwise.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            level: int = logging.WARNING if event["status_code"] >= 500 else logging.INFO
            logger.log(level, "%s %s %s %.2fms", event["method"], event["path"],
                       event["status_code"], event["duration_ms"], extra={"event": event})
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:
            # 로깅 실패는 요청 처리에 영향 없음: Shipping failures never fail the request
            logger.warning("Axiom ingest failed: %s", exc)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.perf_counter()
        method: str = request.method
        path: str = request.url.path
        query_params: dict[str, str] | None = dict(request.query_params) or None

        # Request body 읽기: Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            body_bytes: bytes = await request.body()
            if body_bytes:
                try:
                    request_body = mask_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        error_detail: str | None = None
        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출: Extract the error message from error responses
            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_message(resp_body)

                # 소비한 body를 다시 응답으로 반환: Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "service": settings.APP_NAME,
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = mask_sensitive(query_params)
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail
            self._emit(log_event)

        return response
