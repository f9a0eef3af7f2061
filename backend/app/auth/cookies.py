"""
Request-scoped cookie jar.

Actions and the auth service run without a handle on the HTTP response.
The gating middleware binds a jar for the lifetime of each request; code
deeper in the call stack reads incoming cookies from it and queues writes,
which the middleware copies onto the response.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

from starlette.responses import Response


@dataclass
class PendingCookie:
    value: str
    max_age: Optional[int]
    httponly: bool
    secure: bool


@dataclass
class CookieJar:
    """Incoming cookies plus the writes queued during this request."""

    incoming: Dict[str, str] = field(default_factory=dict)
    pending: Dict[str, PendingCookie] = field(default_factory=dict)
    deleted: set[str] = field(default_factory=set)

    def get(self, name: str) -> Optional[str]:
        if name in self.deleted:
            return None
        if name in self.pending:
            return self.pending[name].value
        return self.incoming.get(name)

    def set(
        self,
        name: str,
        value: str,
        max_age: Optional[int] = None,
        httponly: bool = True,
        secure: bool = False
    ) -> None:
        self.deleted.discard(name)
        self.pending[name] = PendingCookie(value, max_age, httponly, secure)

    def delete(self, name: str) -> None:
        self.pending.pop(name, None)
        self.deleted.add(name)

    def apply(self, response: Response) -> None:
        """Write queued cookie changes onto a response."""
        for name, cookie in self.pending.items():
            response.set_cookie(
                name,
                cookie.value,
                max_age=cookie.max_age,
                httponly=cookie.httponly,
                secure=cookie.secure,
                samesite="lax",
                path="/",
            )
        for name in self.deleted:
            response.delete_cookie(name, path="/")


_cookie_jar: ContextVar[Optional[CookieJar]] = ContextVar("cookie_jar", default=None)


def get_cookie_jar() -> CookieJar:
    """
    Get the jar bound to the current request.

    Raises:
        RuntimeError: If called outside a request
    """
    jar = _cookie_jar.get()
    if jar is None:
        raise RuntimeError("No cookie jar bound. Use bind_cookie_jar() around the request.")
    return jar


@contextmanager
def bind_cookie_jar(incoming: Optional[Mapping[str, str]] = None) -> Iterator[CookieJar]:
    """Bind a fresh jar for the duration of the block."""
    jar = CookieJar(incoming=dict(incoming or {}))
    token = _cookie_jar.set(jar)
    try:
        yield jar
    finally:
        _cookie_jar.reset(token)
