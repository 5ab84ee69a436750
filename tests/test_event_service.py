"""
Tests for event lifecycle: creation with grants, owner-only mutation,
participant management and deletion cascade.
"""

from datetime import date, time

import pytest

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from partner_calendar.models import Comment, Event, EventParticipant, Permission, PrivacyLevel, Reaction
from partner_calendar.services import EventLifecycleService


class TestCreateEvent:

    def test_create_sets_owner_and_fields(self, event_service, alice):
        event = event_service.create_event(alice.id, {
            "title": "  Dinner  ",
            "date": "2024-03-01",
            "start_time": "19:30",
            "end_time": "21:00",
            "period": "night",
            "privacy": "partner",
            "location": "Home",
            "emoji": "🍝",
        })

        assert event.id is not None
        assert event.owner_id == alice.id
        assert event.title == "Dinner"
        assert event.date == date(2024, 3, 1)
        assert event.start_time == time(19, 30)
        assert event.privacy == PrivacyLevel.PARTNER
        assert event.is_special is False

    def test_owner_in_draft_is_rejected(self, event_service, alice, bob):
        with pytest.raises(ValidationException) as exc:
            event_service.create_event(alice.id, {
                "title": "Sneaky",
                "date": "2024-03-01",
                "start_time": "09:00",
                "period": "morning",
                "owner_id": bob.id,
            })
        assert "owner_id" in exc.value.errors

    def test_validation_lists_every_invalid_field(self, event_service, db_session, alice):
        with pytest.raises(ValidationException) as exc:
            event_service.create_event(
                alice.id,
                {"title": "", "date": "not-a-date", "start_time": "09:00", "period": "midnight"},
                [{"user_id": 2, "permission": "admin"}],
            )

        assert {"title", "date", "period", "partners.0.permission"} <= set(exc.value.errors)
        assert db_session.query(Event).count() == 0

    def test_grants_default_to_view(self, make_event, db_session, alice, bob, carol):
        event = make_event(alice, grants=[{"user_id": bob.id}, {"user_id": carol.id, "permission": "edit"}])

        grants = {p.user_id: p.permission for p in db_session.query(EventParticipant).filter_by(event_id=event.id)}
        assert grants == {bob.id: Permission.VIEW, carol.id: Permission.EDIT}

    def test_grant_to_owner_is_skipped(self, make_event, db_session, alice):
        make_event(alice, grants=[{"user_id": alice.id, "permission": "edit"}])

        assert db_session.query(EventParticipant).count() == 0

    def test_grant_to_missing_user_rolls_back_event(self, event_service, db_session, alice):
        with pytest.raises(NotFoundException):
            event_service.create_event(
                alice.id,
                {"title": "Party", "date": "2024-03-01", "start_time": "20:00", "period": "night"},
                [{"user_id": 999}],
            )

        assert db_session.query(Event).count() == 0

    def test_unknown_permission_lenient_policy(self, db_session, alice, bob):
        service = EventLifecycleService(db_session, Settings(database_url="sqlite://", strict_participant_permissions=False))

        event = service.create_event(
            alice.id,
            {"title": "Lunch", "date": "2024-03-01", "start_time": "12:00", "period": "afternoon"},
            [{"user_id": bob.id, "permission": "admin"}],
        )

        grant = db_session.query(EventParticipant).filter_by(event_id=event.id).one()
        assert grant.permission == Permission.VIEW


class TestUpdateEvent:

    def test_owner_updates_only_given_fields(self, event_service, make_event, alice):
        event = make_event(alice, "Dinner", privacy="private")

        updated = event_service.update_event(alice.id, event.id, {"privacy": "partner"})

        assert updated.privacy == PrivacyLevel.PARTNER
        assert updated.title == "Dinner"

    def test_update_reupserts_grants(self, event_service, make_event, db_session, alice, bob):
        event = make_event(alice, grants=[{"user_id": bob.id}])

        event_service.update_event(alice.id, event.id, {}, [{"user_id": bob.id, "permission": "edit"}])

        grant = db_session.query(EventParticipant).filter_by(event_id=event.id, user_id=bob.id).one()
        assert grant.permission == Permission.EDIT

    def test_edit_grant_does_not_allow_update(self, event_service, make_event, db_session, alice, bob):
        event = make_event(alice, "Trip", grants=[{"user_id": bob.id, "permission": "edit"}])

        with pytest.raises(ForbiddenException):
            event_service.update_event(bob.id, event.id, {"title": "Hijacked"})
        db_session.expire_all()
        assert db_session.get(Event, event.id).title == "Trip"

    def test_required_field_cannot_be_cleared(self, event_service, make_event, alice):
        event = make_event(alice)

        with pytest.raises(ValidationException) as exc:
            event_service.update_event(alice.id, event.id, {"title": None})
        assert "title" in exc.value.errors

    def test_missing_event(self, event_service, alice):
        with pytest.raises(NotFoundException):
            event_service.update_event(alice.id, 404, {"title": "Nope"})


class TestDeleteEvent:

    def test_delete_cascades(self, event_service, ledger, make_event, db_session, alice, bob):
        event = make_event(alice, privacy="public", grants=[{"user_id": bob.id}])
        top = ledger.add_comment(bob.id, event.id, "Nice")
        ledger.add_comment(alice.id, event.id, "Thanks", parent_id=top.id)
        ledger.upsert_reaction(bob.id, event.id, "heart")

        event_service.delete_event(alice.id, event.id)

        assert db_session.query(Event).count() == 0
        assert db_session.query(EventParticipant).count() == 0
        assert db_session.query(Comment).count() == 0
        assert db_session.query(Reaction).count() == 0

    def test_only_owner_deletes(self, event_service, make_event, db_session, alice, bob):
        event = make_event(alice, privacy="public")

        with pytest.raises(ForbiddenException):
            event_service.delete_event(bob.id, event.id)
        assert db_session.query(Event).count() == 1

    def test_delete_missing_event(self, event_service, alice):
        with pytest.raises(NotFoundException):
            event_service.delete_event(alice.id, 404)


class TestParticipants:

    def test_add_participant_and_list(self, event_service, make_event, alice, bob):
        event = make_event(alice)

        grant = event_service.add_participant(alice.id, event.id, bob.id)
        result = event_service.list_participants(bob.id, event.id)

        assert grant.permission == Permission.VIEW
        assert result.owner.id == alice.id
        assert [(p.user_id, p.permission) for p in result.participants] == [(bob.id, Permission.VIEW)]

    def test_adding_twice_updates_permission(self, event_service, make_event, db_session, alice, bob):
        event = make_event(alice)
        event_service.add_participant(alice.id, event.id, bob.id, "view")
        event_service.add_participant(alice.id, event.id, bob.id, "edit")

        grants = db_session.query(EventParticipant).filter_by(event_id=event.id).all()
        assert [(g.user_id, g.permission) for g in grants] == [(bob.id, Permission.EDIT)]

    def test_owner_cannot_be_participant(self, event_service, make_event, alice):
        event = make_event(alice)

        with pytest.raises(ValidationException) as exc:
            event_service.add_participant(alice.id, event.id, alice.id)
        assert "user_id" in exc.value.errors

    def test_non_owner_cannot_add(self, event_service, make_event, alice, bob, carol):
        event = make_event(alice, grants=[{"user_id": bob.id, "permission": "edit"}])

        with pytest.raises(ForbiddenException):
            event_service.add_participant(bob.id, event.id, carol.id)

    def test_add_unknown_user(self, event_service, make_event, alice):
        event = make_event(alice)

        with pytest.raises(NotFoundException):
            event_service.add_participant(alice.id, event.id, 999)

    def test_set_permission_requires_known_value(self, event_service, make_event, alice, bob):
        event = make_event(alice, grants=[{"user_id": bob.id}])

        with pytest.raises(ValidationException):
            event_service.set_permission(alice.id, event.id, bob.id, "owner")
        with pytest.raises(ValidationException):
            event_service.set_permission(alice.id, event.id, bob.id, "EDIT")

        assert event_service.set_permission(alice.id, event.id, bob.id, "edit").permission == Permission.EDIT

    def test_remove_participant_revokes_access(self, event_service, visibility, make_event, alice, bob):
        event = make_event(alice, grants=[{"user_id": bob.id}])

        assert event_service.remove_participant(alice.id, event.id, bob.id) is True
        assert event_service.remove_participant(alice.id, event.id, bob.id) is False
        assert visibility.can_view(bob.id, event.id) is False

    def test_list_participants_requires_view(self, event_service, make_event, alice, carol):
        event = make_event(alice)

        with pytest.raises(ForbiddenException):
            event_service.list_participants(carol.id, event.id)


class TestNormalizePermission:

    @pytest.mark.parametrize("raw,expected", [
        (None, Permission.VIEW),
        ("", Permission.VIEW),
        ("view", Permission.VIEW),
        ("edit", Permission.EDIT),
        (Permission.EDIT, Permission.EDIT),
    ])
    def test_known_values(self, event_service, raw, expected):
        assert event_service.normalize_permission(raw) == expected

    def test_unknown_value_strict(self, event_service):
        with pytest.raises(ValueError):
            event_service.normalize_permission("admin")

    @pytest.mark.parametrize("raw", ["EDIT", " edit", "Edit ", "admin"])
    def test_only_exact_values_are_recognized(self, event_service, raw):
        with pytest.raises(ValueError):
            event_service.normalize_permission(raw)

    @pytest.mark.parametrize("raw", ["EDIT", " Edit ", "admin"])
    def test_lenient_policy_maps_to_view(self, db_session, raw):
        service = EventLifecycleService(db_session, Settings(database_url="sqlite://", strict_participant_permissions=False))

        assert service.normalize_permission(raw) == Permission.VIEW


class TestGrantCaseSensitivity:

    def test_uppercase_edit_rejected_under_strict_policy(self, event_service, db_session, alice, bob):
        with pytest.raises(ValidationException) as exc:
            event_service.create_event(
                alice.id,
                {"title": "Trip", "date": "2024-03-01", "start_time": "09:00", "period": "morning"},
                [{"user_id": bob.id, "permission": "EDIT"}],
            )

        assert "partners.0.permission" in exc.value.errors
        assert db_session.query(Event).count() == 0

    def test_padded_edit_becomes_view_under_lenient_policy(self, db_session, alice, bob):
        service = EventLifecycleService(db_session, Settings(database_url="sqlite://", strict_participant_permissions=False))

        event = service.create_event(
            alice.id,
            {"title": "Trip", "date": "2024-03-01", "start_time": "09:00", "period": "morning"},
            [{"user_id": bob.id, "permission": " Edit "}],
        )

        grant = db_session.query(EventParticipant).filter_by(event_id=event.id).one()
        assert grant.permission == Permission.VIEW
