"""
Message vote API routes.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import require_user
from app.auth.tokens import SessionUser
from app.models.schemas import VoteRequest, VoteResponse
from app.services.chat import chat_service

router = APIRouter(prefix="/vote", tags=["vote"])


@router.get("", response_model=List[VoteResponse])
async def get_votes(
    chat_id: str = Query(..., alias="chatId", min_length=1),
    user: SessionUser = Depends(require_user)
):
    """Votes on the messages of one of the user's chats."""
    votes = await chat_service.get_votes(user, chat_id)
    return [VoteResponse.model_validate(v) for v in votes]


@router.patch("", response_model=VoteResponse)
async def vote_message(
    data: VoteRequest,
    user: SessionUser = Depends(require_user)
):
    """Up- or down-vote a message, replacing any earlier vote."""
    vote = await chat_service.vote(user, data.chat_id, data.message_id, data.is_upvoted)
    return VoteResponse.model_validate(vote)
