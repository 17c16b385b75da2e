"""
Admin Session
=============

Signed session cookie issued on admin login and the ``require_admin``
dependency guarding the admin routes.
"""
import hmac
import logging
from typing import Optional

from fastapi import HTTPException, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from sitecms.core.config import get_settings
from sitecms.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_SALT = "admin-session"
ADMIN_ROLE = "admin"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(get_settings().session_secret, salt=SESSION_SALT)


def check_password(password: str) -> bool:
    """
    Compare ``password`` with ADMIN_PASSWORD in constant time.

    Login is disabled while ADMIN_PASSWORD is empty.
    """
    expected = get_settings().admin_password
    if not expected:
        logger.warning("Admin login attempted but ADMIN_PASSWORD is not set")
        return False
    return hmac.compare_digest((password or "").encode("utf-8"), expected.encode("utf-8"))


def open_session(response: Response) -> None:
    settings = get_settings()
    token = _serializer().dumps({"role": ADMIN_ROLE})
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def close_session(response: Response) -> None:
    response.delete_cookie(key=get_settings().session_cookie_name, path="/")


def read_session(token: Optional[str]) -> dict:
    """
    Decode a session cookie.

    Raises:
        AuthenticationError: If the cookie is missing, expired or tampered with
    """
    if not token:
        raise AuthenticationError("Authentication required")
    try:
        data = _serializer().loads(token, max_age=get_settings().session_max_age_seconds)
    except SignatureExpired:
        raise AuthenticationError("Session expired") from None
    except BadSignature:
        logger.warning("Rejected admin session with an invalid signature")
        raise AuthenticationError("Invalid session") from None
    if not isinstance(data, dict) or data.get("role") != ADMIN_ROLE:
        raise AuthenticationError("Invalid session")
    return data


def is_authenticated(request: Request) -> bool:
    try:
        read_session(request.cookies.get(get_settings().session_cookie_name))
    except AuthenticationError:
        return False
    return True


async def require_admin(request: Request) -> None:
    """FastAPI dependency: 401 unless the request carries a valid admin session."""
    try:
        read_session(request.cookies.get(get_settings().session_cookie_name))
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
