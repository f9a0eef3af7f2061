"""
Login and registration actions.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from app.actions.state import LoginActionState, RegisterActionState
from app.auth.service import auth_service
from app.core.exceptions import ChatbotError, ConflictError
from app.core.logging import get_logger
from app.models.schemas import AuthForm

logger = get_logger(__name__)


async def login(
    state: LoginActionState,
    payload: Mapping[str, Any]
) -> LoginActionState:
    """
    Sign in with email and password.

    Returns ``invalid_data`` without touching the database when the form is
    malformed, ``failed`` when the credentials do not match.
    """
    try:
        form = AuthForm.model_validate(dict(payload))
    except ValidationError as e:
        logger.info("Login form rejected", errors=e.error_count())
        return LoginActionState(status="invalid_data")

    try:
        result = await auth_service.sign_in(form.email, form.password)
    except ChatbotError as e:
        logger.warning("Login failed", error_type=type(e).__name__, message=e.message)
        return LoginActionState(status="failed")
    except Exception:
        logger.exception("Login failed unexpectedly")
        return LoginActionState(status="failed")

    if not result.authenticated:
        return LoginActionState(status="failed")

    return LoginActionState(status="success")


async def register(
    state: RegisterActionState,
    payload: Mapping[str, Any]
) -> RegisterActionState:
    """
    Create an account and sign it in.

    Returns ``user_exists`` when the email is taken; the uniqueness check is
    left to the database so concurrent registrations cannot both succeed.
    """
    try:
        form = AuthForm.model_validate(dict(payload))
    except ValidationError as e:
        logger.info("Register form rejected", errors=e.error_count())
        return RegisterActionState(status="invalid_data")

    try:
        await auth_service.register(form.email, form.password)
    except ConflictError:
        return RegisterActionState(status="user_exists")
    except ChatbotError as e:
        logger.warning("Registration failed", error_type=type(e).__name__, message=e.message)
        return RegisterActionState(status="failed")
    except Exception:
        logger.exception("Registration failed unexpectedly")
        return RegisterActionState(status="failed")

    return RegisterActionState(status="success")
