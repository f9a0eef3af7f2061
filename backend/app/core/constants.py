"""
Centralized constants for the Chatbot application.
All magic strings and numbers are defined here.
"""

# =============================================================================
# Database Constants
# =============================================================================

class DatabaseConstants:
    """Database-related constants."""

    # Connection pool settings
    POOL_SIZE = 5
    MAX_OVERFLOW = 10
    POOL_TIMEOUT_SECONDS = 30
    POOL_RECYCLE_SECONDS = 1800

    # Column sizes
    ID_LENGTH = 64
    EMAIL_LENGTH = 64
    PASSWORD_HASH_LENGTH = 255
    TITLE_LENGTH = 255

    # Driver normalization
    ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"
    SYNC_POSTGRES_PREFIXES = ("postgres://", "postgresql://")

    # SQLSTATE codes for integrity violations
    SQLSTATE_UNIQUE_VIOLATION = "23505"
    SQLSTATE_FOREIGN_KEY_VIOLATION = "23503"


# =============================================================================
# Auth Constants
# =============================================================================

class AuthConstants:
    """Authentication and session constants."""

    SESSION_COOKIE_NAME = "session"
    JWT_ALGORITHM = "HS256"
    DEFAULT_SESSION_MAX_AGE_DAYS = 30
    SECONDS_PER_DAY = 86400

    # Password hashing
    PASSWORD_SCHEMES = ["argon2"]
    MIN_PASSWORD_LENGTH = 6

    # User types
    USER_TYPE_GUEST = "guest"
    USER_TYPE_REGULAR = "regular"
    GUEST_EMAIL_PATTERN = r"^guest-\d+$"

    # Login/register pages and guest sign-in endpoint
    LOGIN_PATH = "/login"
    REGISTER_PATH = "/register"
    HOME_PATH = "/"
    GUEST_SIGN_IN_PATH = "/api/auth/guest"


class GateConstants:
    """Path patterns evaluated by the request gate."""

    # Requests matching these patterns are gated
    MATCHED_PATTERNS = (
        "/",
        "/chat/{id}",
        "/api/*",
        "/login",
        "/register",
    )

    # Always allowed through, regardless of session
    PUBLIC_PREFIXES = (
        "/api/auth/",
        "/api/health/",
    )

    # Always allowed through, matched exactly
    PUBLIC_PATHS = (
        "/api/health",
    )

    # Reachable without a session; regular users are sent home
    AUTH_PAGES = (
        "/login",
        "/register",
    )


# =============================================================================
# Chat Constants
# =============================================================================

class ChatConstants:
    """Chat-related constants."""

    # Message roles
    ROLE_USER = "user"
    ROLE_ASSISTANT = "assistant"
    ROLE_SYSTEM = "system"

    # Visibility
    VISIBILITY_PUBLIC = "public"
    VISIBILITY_PRIVATE = "private"
    DEFAULT_VISIBILITY = VISIBILITY_PRIVATE

    # Message part types
    PART_TYPE_TEXT = "text"
    MAX_TEXT_PART_LENGTH = 2000

    # Titles derived from the first user message
    MAX_TITLE_LENGTH = 80
    DEFAULT_TITLE = "New chat"

    # Chat models selectable by the user
    CHAT_MODEL_COOKIE_NAME = "chat-model"
    DEFAULT_CHAT_MODEL = "chat-model"
    CHAT_MODELS = frozenset(["chat-model", "chat-model-reasoning"])

    # Votes
    VOTE_UP = "up"
    VOTE_DOWN = "down"


class EntitlementConstants:
    """Per user type limits."""

    MAX_MESSAGES_PER_DAY = {
        AuthConstants.USER_TYPE_GUEST: 20,
        AuthConstants.USER_TYPE_REGULAR: 100,
    }
    QUOTA_WINDOW_HOURS = 24


# =============================================================================
# Document Constants
# =============================================================================

class DocumentConstants:
    """Document (artifact) constants."""

    KIND_TEXT = "text"
    KIND_CODE = "code"
    KIND_IMAGE = "image"
    KIND_SHEET = "sheet"


# =============================================================================
# API Constants
# =============================================================================

class APIConstants:
    """API-related constants."""

    PREFIX = "/api"

    # Pagination defaults
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100

    # Content types accepted by action endpoints
    JSON_CONTENT_TYPE = "application/json"


class HTTPStatus:
    """HTTP status codes."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    TEMPORARY_REDIRECT = 307
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
