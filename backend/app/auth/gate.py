"""
Request gate: decides, per request, whether to process it or redirect.

A request is either authenticated or unauthenticated. Only paths that match
one of the gated patterns are evaluated; everything else passes untouched.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional
from urllib.parse import quote, urlsplit

from app.auth.tokens import SessionUser
from app.core.constants import AuthConstants, GateConstants


class GateState(str, Enum):
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class GateDecision:
    """Allow the request, or redirect it to ``location``."""

    state: GateState
    location: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.location is None


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile a path pattern into a regex.

    ``{name}`` matches one path segment and a trailing ``*`` matches the
    rest of the path.
    """
    regex = ""
    for token in re.split(r"(\{[^/}]+\}|\*)", pattern):
        if token == "*":
            regex += ".*"
        elif token.startswith("{") and token.endswith("}"):
            regex += "[^/]+"
        else:
            regex += re.escape(token)
    return re.compile(f"^{regex}$")


def safe_redirect_path(url: Optional[str], default: str = AuthConstants.HOME_PATH) -> str:
    """Only allow same-origin relative redirect targets."""
    if not url:
        return default
    parts = urlsplit(url)
    if parts.scheme or parts.netloc or not url.startswith("/") or url.startswith("//"):
        return default
    return url


class RequestGate:
    """Two-state interceptor evaluated against a static set of path patterns."""

    def __init__(
        self,
        patterns: Iterable[str] = GateConstants.MATCHED_PATTERNS,
        public_prefixes: Iterable[str] = GateConstants.PUBLIC_PREFIXES,
        public_paths: Iterable[str] = GateConstants.PUBLIC_PATHS,
        auth_pages: Iterable[str] = GateConstants.AUTH_PAGES,
        guest_enabled: bool = True
    ):
        self._patterns = [compile_pattern(p) for p in patterns]
        self._public_prefixes = tuple(public_prefixes)
        self._public_paths = frozenset(public_paths)
        self._auth_pages = frozenset(auth_pages)
        self._guest_enabled = guest_enabled

    def is_public(self, path: str) -> bool:
        return path in self._public_paths or path.startswith(self._public_prefixes)

    def matches(self, path: str) -> bool:
        return any(p.match(path) for p in self._patterns)

    def evaluate(
        self,
        path: str,
        session_user: Optional[SessionUser],
        query: str = ""
    ) -> GateDecision:
        """
        Decide what to do with a request.

        Args:
            path: Request path
            session_user: Identity from the session cookie, if valid
            query: Raw query string, preserved in redirect targets

        Returns:
            GateDecision with a redirect location, or none to allow
        """
        state = (
            GateState.AUTHENTICATED if session_user is not None
            else GateState.UNAUTHENTICATED
        )

        if self.is_public(path) or not self.matches(path):
            return GateDecision(state)

        if state == GateState.UNAUTHENTICATED:
            if path in self._auth_pages:
                return GateDecision(state)
            return GateDecision(state, self._sign_in_location(path, query))

        if path in self._auth_pages and not session_user.is_guest:
            return GateDecision(state, AuthConstants.HOME_PATH)

        return GateDecision(state)

    def _sign_in_location(self, path: str, query: str) -> str:
        original = f"{path}?{query}" if query else path
        if self._guest_enabled:
            return f"{AuthConstants.GUEST_SIGN_IN_PATH}?redirectUrl={quote(original, safe='')}"
        return f"{AuthConstants.LOGIN_PATH}?callbackUrl={quote(original, safe='')}"
