"""
Action API route: invokes chat actions by name.
"""

from typing import Awaitable, Callable, Dict, Tuple, Type

from fastapi import APIRouter, Depends, Request

from app.actions import (
    ActionState,
    ChatActionState,
    ModelSelectionState,
    delete_trailing_messages,
    save_chat_model_as_cookie,
    update_chat_visibility,
)
from app.api.dependencies import read_payload, require_user
from app.auth.tokens import SessionUser
from app.core.exceptions import NotFoundError

router = APIRouter(prefix="/actions", tags=["actions"])

ActionHandler = Callable[..., Awaitable[ActionState]]

ACTIONS: Dict[str, Tuple[ActionHandler, Type[ActionState]]] = {
    "update-chat-visibility": (update_chat_visibility, ChatActionState),
    "delete-trailing-messages": (delete_trailing_messages, ChatActionState),
    "save-chat-model": (save_chat_model_as_cookie, ModelSelectionState),
}


@router.post("/{name}", response_model=ActionState)
async def invoke_action(
    name: str,
    request: Request,
    user: SessionUser = Depends(require_user)
):
    """
    Run an action with the submitted form or JSON payload.

    Always answers 200 with the resulting state; the status field tells the
    client what happened.
    """
    if name not in ACTIONS:
        raise NotFoundError(
            message=f"Unknown action '{name}'",
            details={"action": name, "available_actions": sorted(ACTIONS)}
        )

    action, state_cls = ACTIONS[name]
    payload = await read_payload(request)
    return await action(state_cls(), payload, user=user)
