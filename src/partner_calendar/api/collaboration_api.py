"""
Comments and Reactions API

Every route checks that the caller may view the event before touching
the ledger.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from partner_calendar.core.dependencies import (
    get_collaboration_ledger,
    get_current_user_id,
    get_visibility_service,
)
from partner_calendar.schemas.collaboration import (
    CommentResponse,
    CommentThreadResponse,
    CreateCommentRequest,
    CreateReactionRequest,
    ReactionResponse,
)
from partner_calendar.services import CollaborationLedger, VisibilityService


router = APIRouter(
    prefix="/events",
    tags=["Collaboration"]
)


@router.get("/{event_id}/comments", response_model=List[CommentResponse])
def list_comments(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    return [CommentResponse.model_validate(c) for c in ledger.list_comments(event_id)]


@router.get("/{event_id}/comments/threads", response_model=List[CommentThreadResponse])
def list_comment_threads(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    return [
        CommentThreadResponse(
            comment=CommentResponse.model_validate(thread.comment),
            replies=[CommentResponse.model_validate(r) for r in thread.replies],
        )
        for thread in ledger.list_comment_threads(event_id)
    ]


@router.post("/{event_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    event_id: int,
    request: CreateCommentRequest,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    comment = ledger.add_comment(user_id, event_id, request.content, request.parent_id)
    return CommentResponse.model_validate(comment)


@router.get("/{event_id}/reactions", response_model=List[ReactionResponse])
def list_reactions(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    return [ReactionResponse.model_validate(r) for r in ledger.list_reactions(event_id)]


@router.post("/{event_id}/reactions", response_model=ReactionResponse, status_code=status.HTTP_201_CREATED)
def add_reaction(
    event_id: int,
    request: CreateReactionRequest,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    return ReactionResponse.model_validate(ledger.upsert_reaction(user_id, event_id, request.type))


@router.delete("/{event_id}/reactions", status_code=status.HTTP_204_NO_CONTENT)
def remove_reaction(
    event_id: int,
    user_id: int = Depends(get_current_user_id),
    visibility: VisibilityService = Depends(get_visibility_service),
    ledger: CollaborationLedger = Depends(get_collaboration_ledger),
):
    visibility.require_view(user_id, event_id)
    ledger.remove_reaction(user_id, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
