"""
Server-side actions invoked from client forms and events.

Each action takes the previous result state and a payload mapping, validates
the payload, performs a single side effect and returns a new state.
"""

from app.actions.auth import login, register
from app.actions.chat import (
    delete_trailing_messages,
    save_chat_model_as_cookie,
    update_chat_visibility,
)
from app.actions.state import (
    ActionState,
    ChatActionState,
    LoginActionState,
    ModelSelectionState,
    RegisterActionState,
)

__all__ = [
    # Auth
    "login",
    "register",
    # Chat
    "update_chat_visibility",
    "delete_trailing_messages",
    "save_chat_model_as_cookie",
    # States
    "ActionState",
    "ChatActionState",
    "LoginActionState",
    "ModelSelectionState",
    "RegisterActionState",
]
