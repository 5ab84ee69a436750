"""
Partners API
"""

from typing import List

from fastapi import APIRouter, Depends, status

from partner_calendar.core.dependencies import get_current_user_id, get_partner_graph
from partner_calendar.schemas.partner import (
    InvitePartnerRequest,
    PartnerLinkResponse,
    PartnerLinkWithUserResponse,
    PartnerStatusUpdateRequest,
)
from partner_calendar.schemas.user import UserPublic
from partner_calendar.services import PartnerEntry, PartnerGraphService


router = APIRouter(
    prefix="/partners",
    tags=["Partners"]
)


def _with_user(entries: List[PartnerEntry]) -> List[PartnerLinkWithUserResponse]:
    return [
        PartnerLinkWithUserResponse(
            **PartnerLinkResponse.model_validate(entry.link).model_dump(),
            counterpart=UserPublic.model_validate(entry.counterpart),
        )
        for entry in entries
    ]


@router.get("", response_model=List[PartnerLinkWithUserResponse])
def list_partners(
    user_id: int = Depends(get_current_user_id),
    graph: PartnerGraphService = Depends(get_partner_graph),
):
    return _with_user(graph.list_accepted(user_id))


@router.get("/requests", response_model=List[PartnerLinkWithUserResponse])
def list_incoming_requests(
    user_id: int = Depends(get_current_user_id),
    graph: PartnerGraphService = Depends(get_partner_graph),
):
    return _with_user(graph.list_pending_incoming(user_id))


@router.get("/requests/outgoing", response_model=List[PartnerLinkWithUserResponse])
def list_outgoing_requests(
    user_id: int = Depends(get_current_user_id),
    graph: PartnerGraphService = Depends(get_partner_graph),
):
    return _with_user(graph.list_pending_outgoing(user_id))


@router.post("/invite", response_model=PartnerLinkResponse, status_code=status.HTTP_201_CREATED)
def invite_partner(
    request: InvitePartnerRequest,
    user_id: int = Depends(get_current_user_id),
    graph: PartnerGraphService = Depends(get_partner_graph),
):
    link = graph.invite_partner(user_id, request.partner_email, request.share_all, request.share_raft_only)
    return PartnerLinkResponse.model_validate(link)


@router.put("/{link_id}/status", response_model=PartnerLinkResponse)
def respond_to_request(
    link_id: int,
    request: PartnerStatusUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    graph: PartnerGraphService = Depends(get_partner_graph),
):
    link = graph.respond_to_request(user_id, link_id, request.status)
    return PartnerLinkResponse.model_validate(link)
