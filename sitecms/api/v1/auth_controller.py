"""
Auth Controller
===============

Admin login, logout and session status.
"""
import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from sitecms.api.v1.security import check_password, close_session, is_authenticated, open_session
from sitecms.application.dto.auth_dto import LoginRequest, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    response_model=SessionResponse,
    summary="Admin login",
    description="Check the administrator password and set the signed session cookie.",
)
async def login(request: LoginRequest, response: Response) -> SessionResponse:
    if not check_password(request.password):
        logger.warning("Failed admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )
    open_session(response)
    logger.info("Admin logged in")
    return SessionResponse(authenticated=True)


@router.post("/logout", response_model=SessionResponse, summary="Admin logout")
async def logout(response: Response) -> SessionResponse:
    close_session(response)
    return SessionResponse(authenticated=False)


@router.get("/session", response_model=SessionResponse, summary="Current session status")
async def session(request: Request) -> SessionResponse:
    return SessionResponse(authenticated=is_authenticated(request))
