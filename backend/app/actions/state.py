"""
Result states returned by actions.

Every action returns one state from a small closed set. Clients render the
UI from the status; nothing is raised to them.
"""

from typing import Literal, Optional

from pydantic import BaseModel

LoginStatus = Literal["idle", "in_progress", "success", "failed", "invalid_data"]
RegisterStatus = Literal[
    "idle", "in_progress", "success", "failed", "user_exists", "invalid_data"
]
ModelSelectionStatus = Literal["idle", "success", "failed", "invalid_data"]
ChatActionStatus = Literal[
    "idle", "success", "failed", "invalid_data", "not_found", "forbidden"
]


class ActionState(BaseModel):
    """Base result state."""

    status: str = "idle"
    message: Optional[str] = None


class LoginActionState(ActionState):
    status: LoginStatus = "idle"


class RegisterActionState(ActionState):
    status: RegisterStatus = "idle"


class ChatActionState(ActionState):
    status: ChatActionStatus = "idle"


class ModelSelectionState(ActionState):
    status: ModelSelectionStatus = "idle"
