"""
Core module containing cross-cutting concerns.
"""

from app.core.config import Settings, get_settings
from app.core.exceptions import ChatbotError
from app.core.logging import get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "ChatbotError",
    "get_logger",
    "setup_logging",
]
