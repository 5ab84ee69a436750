"""
API routers package for the FastAPI application.

This package contains all API endpoint routers organized by domain:
- events_api: Event CRUD, feeds and participant grants
- collaboration_api: Comments and reactions
- partners_api: Partner invitations and links
- users_api: User registration and profiles
- external_calendars_api: Linked external calendars
- health_api: Health check endpoints
"""

from .events_api import router as events_api_router
from .collaboration_api import router as collaboration_api_router
from .partners_api import router as partners_api_router
from .users_api import router as users_api_router
from .external_calendars_api import router as external_calendars_api_router
from .health_api import health_api_router
from .error_handlers import register_exception_handlers

__all__ = [
    "events_api_router",
    "collaboration_api_router",
    "partners_api_router",
    "users_api_router",
    "external_calendars_api_router",
    "health_api_router",
    "register_exception_handlers",
]
