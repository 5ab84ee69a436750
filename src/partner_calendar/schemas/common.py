"""
Common/shared Pydantic schemas.

This module contains reusable schemas used across the application:
- Base response types
- Error responses
- Conversion of pydantic validation errors into field -> message maps
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str
    detail: Optional[str] = None
    errors: Dict[str, str] = Field(default_factory=dict)
    success: bool = False
    timestamp: datetime = Field(default_factory=_utcnow)


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    database: Dict[str, Any]
    timestamp: datetime = Field(default_factory=_utcnow)


def error_map(errors: Iterable[Dict[str, Any]], skip_prefix: Iterable[str] = ()) -> Dict[str, str]:
    """
    Flatten pydantic error dicts into {field: message}.

    Every invalid field is reported; when a field fails several rules the
    first message wins. Location prefixes such as "body" are dropped.
    """
    skip = set(skip_prefix)
    result: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if str(part) not in skip]
        field = ".".join(loc) or "__root__"
        result.setdefault(field, err.get("msg", "Invalid value"))
    return result
