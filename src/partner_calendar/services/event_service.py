"""
Event Lifecycle Service

Creates, updates and deletes events and manages participant grants.
Only the owner may mutate an event or its grants; an edit grant does not
extend to the event record itself. Each operation commits once, so an
event is never left behind without the grants requested alongside it.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from partner_calendar.models import Event, EventParticipant, Permission, User
from partner_calendar.schemas.event import EventDraft, EventPatch, ParticipantGrant
from partner_calendar.services.base_service import BaseService
from partner_calendar.services.visibility import VisibilityService

GrantInput = Union[ParticipantGrant, Mapping[str, Any]]
PERMISSION_VALUES = {p.value for p in Permission}


class EventParticipants(NamedTuple):
    owner: User
    participants: List[EventParticipant]


class EventLifecycleService(BaseService):
    """Owner-only mutation of events and their participant grants."""

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        visibility: Optional[VisibilityService] = None,
    ):
        super().__init__(db, settings, service_name="EVENT_SERVICE")
        self.visibility = visibility or VisibilityService(db, self.settings)

    # ========================================================================
    # Grant normalization
    # ========================================================================

    def normalize_permission(self, raw: Optional[str]) -> Permission:
        """
        Map a requested permission onto view/edit.

        Missing values mean view. Only the exact strings "view" and "edit"
        are recognized; anything else is rejected, or mapped to view when
        strict_participant_permissions is off.

        Raises:
            ValueError: Unknown permission under the strict policy
        """
        if raw is None or raw == "":
            return Permission.VIEW
        value = raw.value if isinstance(raw, Permission) else str(raw)
        if value in PERMISSION_VALUES:
            return Permission(value)
        if self.settings.strict_participant_permissions:
            raise ValueError(f"permission must be view or edit, got {raw!r}")
        self.logger.info(f"Unknown permission {raw!r} normalized to view")
        return Permission.VIEW

    def _normalize_grants(
        self,
        grants: Sequence[GrantInput],
        field: str = "partners",
    ) -> Tuple[List[Tuple[int, Permission]], Dict[str, str]]:
        normalized: List[Tuple[int, Permission]] = []
        errors: Dict[str, str] = {}
        for index, raw in enumerate(grants or ()):
            try:
                grant = self.parse(ParticipantGrant, raw)
            except ValidationException as e:
                for key, msg in e.errors.items():
                    errors[f"{field}.{index}.{key}"] = msg
                continue
            try:
                normalized.append((grant.user_id, self.normalize_permission(grant.permission)))
            except ValueError as e:
                errors[f"{field}.{index}.permission"] = str(e)
        return normalized, errors

    def _parse_with_grants(self, schema, data, grants):
        errors: Dict[str, str] = {}
        parsed = None
        try:
            parsed = self.parse(schema, data)
        except ValidationException as e:
            errors.update(e.errors)
        normalized, grant_errors = self._normalize_grants(grants)
        errors.update(grant_errors)
        if errors:
            raise ValidationException(f"Invalid {schema.__name__} data", errors)
        return parsed, normalized

    def _apply_grants(self, uow, event: Event, grants: List[Tuple[int, Permission]]) -> None:
        for user_id, permission in grants:
            if user_id == event.owner_id:
                # Ownership already implies full access
                continue
            if not uow.users.exists(user_id):
                raise NotFoundException("User", user_id)
            uow.participants.upsert(event.id, user_id, permission)

    # ========================================================================
    # Authorization helpers
    # ========================================================================

    def _owned_event(self, uow, requester_id: int, event_id: int, action: str) -> Event:
        event = uow.events.get(event_id)
        if event is None:
            raise NotFoundException("Event", event_id)
        if event.owner_id != requester_id:
            self.logger.warning(f"User {requester_id} tried to {action} event {event_id} owned by {event.owner_id}")
            raise ForbiddenException(f"Not authorized to {action} this event")
        return event

    # ========================================================================
    # Event operations
    # ========================================================================

    def create_event(
        self,
        owner_id: int,
        draft: Union[EventDraft, Mapping[str, Any]],
        participant_grants: Sequence[GrantInput] = (),
    ) -> Event:
        """
        Create an event owned by owner_id and apply the requested grants.

        Raises:
            ValidationException: Every invalid draft field and grant
            NotFoundException: Owner or a grantee does not exist
        """
        parsed, grants = self._parse_with_grants(EventDraft, draft, participant_grants)
        values = parsed.model_dump(include=set(EventDraft.model_fields))

        with self.uow() as uow:
            # Serializes with partner-acceptance fan-out for the same owner
            if uow.users.get_for_update(owner_id) is None:
                raise NotFoundException("User", owner_id)
            event = uow.events.add(Event(owner_id=owner_id, **values))
            self._apply_grants(uow, event, grants)
            uow.commit()

        self.logger.info(
            f"Event {event.id} created by user {owner_id} "
            f"({event.privacy.value}, {len(grants)} grants)"
        )
        return event

    def update_event(
        self,
        requester_id: int,
        event_id: int,
        patch: Union[EventPatch, Mapping[str, Any]],
        participant_grants: Sequence[GrantInput] = (),
    ) -> Event:
        """
        Apply a partial update and re-upsert grants. Owner only.

        Raises:
            ValidationException: Every invalid patch field and grant
            NotFoundException: No such event, or a grantee does not exist
            ForbiddenException: Requester is not the owner
        """
        parsed, grants = self._parse_with_grants(EventPatch, patch, participant_grants)
        changes = parsed.model_dump(exclude_unset=True, include=set(EventPatch.model_fields))

        with self.uow() as uow:
            event = self._owned_event(uow, requester_id, event_id, "update")
            if changes:
                uow.events.update_fields(event, changes)
            self._apply_grants(uow, event, grants)
            uow.commit()

        self.logger.info(f"Event {event_id} updated by user {requester_id}: {sorted(changes)}")
        return event

    def delete_event(self, requester_id: int, event_id: int) -> None:
        """
        Delete an event with its participants, comments and reactions. Owner only.

        Raises:
            NotFoundException: No such event
            ForbiddenException: Requester is not the owner
        """
        with self.uow() as uow:
            event = self._owned_event(uow, requester_id, event_id, "delete")
            uow.events.delete(event)
            uow.commit()
        self.logger.info(f"Event {event_id} deleted by user {requester_id}")

    def get_event(self, viewer_id: int, event_id: int) -> Event:
        """Event detail, gated by can_view."""
        return self.visibility.require_view(viewer_id, event_id)

    # ========================================================================
    # Participant operations
    # ========================================================================

    def list_participants(self, viewer_id: int, event_id: int) -> EventParticipants:
        """Owner profile and participant grants of an event the viewer may read."""
        event = self.visibility.require_view(viewer_id, event_id)
        return EventParticipants(event.owner, self.uow().participants.list_for_event(event_id))

    def add_participant(
        self,
        requester_id: int,
        event_id: int,
        user_id: int,
        permission: Optional[str] = None,
    ) -> EventParticipant:
        """
        Grant a user access to an event, updating an existing grant. Owner only.

        Raises:
            ValidationException: Unknown permission, or the owner themself
            NotFoundException: No such event or user
            ForbiddenException: Requester is not the owner
        """
        try:
            normalized = self.normalize_permission(permission)
        except ValueError as e:
            raise ValidationException("Invalid permission", {"permission": str(e)}) from e
        return self._grant(requester_id, event_id, user_id, normalized, "add participants to")

    def set_permission(self, requester_id: int, event_id: int, user_id: int, permission: str) -> EventParticipant:
        """
        Set a participant's permission explicitly. Owner only.

        Unlike grants attached to create/update, the permission is required
        and must be view or edit.
        """
        value = permission.value if isinstance(permission, Permission) else str(permission or "")
        if value not in PERMISSION_VALUES:
            raise ValidationException(
                "Invalid permission",
                {"permission": f"permission must be view or edit, got {permission!r}"},
            )
        return self._grant(requester_id, event_id, user_id, Permission(value), "update permissions on")

    def _grant(self, requester_id: int, event_id: int, user_id: int, permission: Permission, action: str) -> EventParticipant:
        with self.uow() as uow:
            event = self._owned_event(uow, requester_id, event_id, action)
            if user_id == event.owner_id:
                raise ValidationException(
                    "The owner cannot be a participant",
                    {"user_id": "The owner already has full access"},
                )
            if not uow.users.exists(user_id):
                raise NotFoundException("User", user_id)
            grant = uow.participants.upsert(event_id, user_id, permission)
            uow.commit()
        self.logger.info(f"User {user_id} granted {permission.value} on event {event_id}")
        return grant

    def remove_participant(self, requester_id: int, event_id: int, user_id: int) -> bool:
        """
        Revoke a user's grant. Owner only; revoking a missing grant is a no-op.

        Returns:
            True if a grant was removed
        """
        with self.uow() as uow:
            self._owned_event(uow, requester_id, event_id, "remove participants from")
            removed = uow.participants.remove(event_id, user_id)
            uow.commit()
        if removed:
            self.logger.info(f"User {user_id} removed from event {event_id}")
        return removed
