"""
FastAPI middleware for logging, request gating, and error handling.
"""

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.auth.cookies import bind_cookie_jar
from app.auth.gate import RequestGate
from app.auth.service import auth_service
from app.core.config import get_settings
from app.core.constants import HTTPStatus
from app.core.exceptions import ChatbotError
from app.core.logging import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging.

    Logs:
    - Request method, path, and ID
    - Response status and timing
    - Errors with stack traces
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate or use existing request ID
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        # Add to request state for access in handlers
        request.state.request_id = request_id

        start_time = time.time()

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path
        )

        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None
        )

        try:
            response = await call_next(request)

            duration_ms = (time.time() - start_time) * 1000

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2)
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000

            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2)
            )
            raise

        finally:
            structlog.contextvars.unbind_contextvars(
                "request_id", "method", "path"
            )


class AuthGateMiddleware(BaseHTTPMiddleware):
    """
    Resolves the session cookie and runs the request gate.

    Gated requests without a session are redirected before they reach a
    route. Allowed requests run with a cookie jar bound, and cookie writes
    queued during the request are copied onto the response.
    """

    def __init__(self, app: ASGIApp, gate: RequestGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()

        session_user = auth_service.read_session(
            request.cookies.get(settings.auth.cookie_name)
        )
        request.state.session_user = session_user

        decision = self.gate.evaluate(
            request.url.path,
            session_user,
            query=request.url.query
        )

        if not decision.allowed:
            logger.info(
                "Request redirected by gate",
                state=decision.state.value,
                location=decision.location
            )
            return RedirectResponse(
                decision.location,
                status_code=HTTPStatus.TEMPORARY_REDIRECT
            )

        if session_user is not None:
            structlog.contextvars.bind_contextvars(user_id=session_user.id)

        try:
            with bind_cookie_jar(request.cookies) as jar:
                response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("user_id")

        jar.apply(response)
        return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(ChatbotError)
    async def chatbot_error_handler(
        request: Request,
        exc: ChatbotError
    ) -> JSONResponse:
        """Handle application errors."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.warning(
            "Application error",
            error_type=type(exc).__name__,
            message=exc.message,
            request_id=request_id
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                **exc.to_dict(),
                "request_id": request_id
            }
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.exception(
            "Unexpected error",
            error_type=type(exc).__name__,
            message=str(exc),
            request_id=request_id
        )

        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
                "request_id": request_id
            }
        )


def setup_middleware(app: FastAPI) -> None:
    """
    Setup all middleware for the application.

    Added last runs first: request logging wraps the gate.
    """
    settings = get_settings()

    app.add_middleware(
        AuthGateMiddleware,
        gate=RequestGate(guest_enabled=settings.auth.guest_enabled)
    )
    app.add_middleware(RequestLoggingMiddleware)
