"""
FastAPI dependency providers.

Identity comes from the upstream auth provider as a request header; the
core trusts it completely. Services are built per request over the
request's database session.
"""

import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings, get_settings
from partner_calendar.core.database import get_db
from partner_calendar.core.exceptions import AuthenticationException

logger = logging.getLogger('CORE_DEPENDENCIES')


# ============================================================================
# Identity
# ============================================================================

def get_current_user_id(request: Request, settings: Settings = Depends(get_settings)) -> int:
    """
    Authenticated user ID taken from the configured identity header.

    Raises:
        AuthenticationException: Header missing or not an integer
    """
    raw = request.headers.get(settings.user_id_header)
    if raw is None or not raw.strip():
        raise AuthenticationException("Unauthorized")
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Rejected non-integer identity header value: {raw!r}")
        raise AuthenticationException("Unauthorized")


# ============================================================================
# Service Dependencies
# ============================================================================

def get_partner_graph(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import PartnerGraphService
    return PartnerGraphService(db, settings)


def get_visibility_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import VisibilityService
    return VisibilityService(db, settings)


def get_event_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import EventLifecycleService
    return EventLifecycleService(db, settings)


def get_collaboration_ledger(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import CollaborationLedger
    return CollaborationLedger(db, settings)


def get_external_calendar_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import ExternalCalendarService
    return ExternalCalendarService(db, settings)


def get_user_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    from partner_calendar.services import UserService
    return UserService(db, settings)
