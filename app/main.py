"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router
registration. Every error is rendered in the standard response envelope
{"success": false, "data": null, "message": "..."}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어: Request/response logging (Axiom or stdlib logging)
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어: Angular SPA 출처 허용 (Allow the SPA origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_envelope(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "message": message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException을 응답 엔벨로프로 변환합니다 (WWW-Authenticate 등 헤더 유지)."""
    return _error_envelope(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 실패 → 400.

    Render Pydantic validation failures as 400 with a readable message,
    e.g. "body.email: value is not a valid email address".
    """
    messages: list[str] = []
    for error in exc.errors():
        location: str = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg', 'invalid value')}")
    return _error_envelope(400, "; ".join(messages) or "Invalid request")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록: Router registration
# ---------------------------------------------------------------------------
# auth_router: /api/v1/register, /api/v1/login, /api/logout
# users_router: /api/users/me
# posts_router: /api/v1/posts..., /api/v1/users/{user_id}/posts
# admin_router: /api/v1/admin/...
from app.api.auth import router as auth_router  # noqa: E402
from app.api.users import router as users_router  # noqa: E402
from app.api.posts import router as posts_router  # noqa: E402
from app.api.admin import admin_router  # noqa: E402

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(users_router, prefix="/api", tags=["Profile"])
app.include_router(posts_router, prefix="/api", tags=["Posts"])
app.include_router(admin_router, prefix="/api/v1/admin")
