"""
Chat history API route.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import require_user
from app.auth.tokens import SessionUser
from app.core.constants import APIConstants
from app.core.exceptions import ValidationError
from app.db import queries
from app.models.schemas import ChatHistoryResponse, ChatResponse

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=ChatHistoryResponse)
async def get_history(
    limit: int = Query(APIConstants.DEFAULT_PAGE_SIZE, ge=1, le=APIConstants.MAX_PAGE_SIZE),
    starting_after: Optional[str] = None,
    ending_before: Optional[str] = None,
    user: SessionUser = Depends(require_user)
):
    """Page through the user's chats, newest first."""
    if starting_after and ending_before:
        raise ValidationError("Only one of starting_after or ending_before can be provided")

    page = await queries.get_chats_by_user_id(
        user.id,
        limit,
        starting_after=starting_after,
        ending_before=ending_before
    )

    return ChatHistoryResponse(
        chats=[ChatResponse.model_validate(c) for c in page.chats],
        has_more=page.has_more
    )
