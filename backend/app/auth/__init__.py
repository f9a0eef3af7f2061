"""
Authentication: password hashing, session tokens and the request gate.

The credential exchange lives in ``app.auth.service``; it is not imported
here because the query functions depend on ``app.auth.passwords``.
"""

from app.auth.cookies import CookieJar, bind_cookie_jar, get_cookie_jar
from app.auth.gate import GateDecision, GateState, RequestGate, safe_redirect_path
from app.auth.passwords import hash_password, verify_password
from app.auth.tokens import SessionUser, create_session_token, decode_session_token

__all__ = [
    # Cookies
    "CookieJar",
    "bind_cookie_jar",
    "get_cookie_jar",
    # Gate
    "GateDecision",
    "GateState",
    "RequestGate",
    "safe_redirect_path",
    # Passwords
    "hash_password",
    "verify_password",
    # Tokens
    "SessionUser",
    "create_session_token",
    "decode_session_token",
]
