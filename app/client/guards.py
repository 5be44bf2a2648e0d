"""라우트 가드 — 세션 상태에 따른 리다이렉트 결정.

Route guards. Each guard returns the path to redirect to, or None when
navigation to url is allowed.
"""

from app.client.session import AuthSession

ROLE_ADMIN: str = "ROLE_ADMIN"

LOGIN_PATH: str = "/login"
REGISTER_PATH: str = "/register"
HOME_PATH: str = "/home"


def auth_guard(session: AuthSession, url: str) -> str | None:
    """인증 가드.

    Authenticated users visiting /login go home; anonymous users may only
    visit /login and /register.
    """
    if session.is_authenticated():
        return HOME_PATH if url == LOGIN_PATH else None
    if url in (LOGIN_PATH, REGISTER_PATH):
        return None
    return LOGIN_PATH


def admin_guard(session: AuthSession, url: str) -> str | None:
    """관리자 가드 — 인증 + ROLE_ADMIN 필요."""
    redirect: str | None = auth_guard(session, url)
    if redirect is not None:
        return redirect
    if not session.is_authenticated():
        return LOGIN_PATH
    if not session.has_role(ROLE_ADMIN):
        return HOME_PATH
    return None
