"""
Authentication API routes: login/register forms, guest sessions, sign-out.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from app.actions import LoginActionState, RegisterActionState, login, register
from app.api.dependencies import get_session_user, read_payload
from app.auth.gate import safe_redirect_path
from app.auth.service import auth_service
from app.auth.tokens import SessionUser
from app.core.constants import AuthConstants, HTTPStatus
from app.core.logging import get_logger
from app.models.schemas import SessionResponse, SessionUserResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginActionState)
async def login_form(request: Request):
    """Submit the login form. The result state drives the form UI."""
    payload = await read_payload(request)
    return await login(LoginActionState(), payload)


@router.post("/register", response_model=RegisterActionState)
async def register_form(request: Request):
    """Submit the registration form."""
    payload = await read_payload(request)
    return await register(RegisterActionState(), payload)


@router.get("/guest")
async def guest_sign_in(
    redirect_url: Optional[str] = Query(None, alias="redirectUrl"),
    user: Optional[SessionUser] = Depends(get_session_user)
):
    """
    Sign in as a new guest and go back to where the request came from.

    Requests that already carry a session are sent home.
    """
    if user is not None:
        return RedirectResponse(
            AuthConstants.HOME_PATH,
            status_code=HTTPStatus.TEMPORARY_REDIRECT
        )

    await auth_service.sign_in_guest()

    return RedirectResponse(
        safe_redirect_path(redirect_url),
        status_code=HTTPStatus.TEMPORARY_REDIRECT
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(user: Optional[SessionUser] = Depends(get_session_user)):
    """Current session user, or null."""
    if user is None:
        return SessionResponse()
    return SessionResponse(user=SessionUserResponse(**user.to_dict()))


@router.post("/logout")
async def logout():
    """Clear the session cookie."""
    auth_service.sign_out()
    return {"status": "success"}
