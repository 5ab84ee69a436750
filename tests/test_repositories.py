"""
Tests for the database-side upserts behind participant grants.
"""

from partner_calendar.models import EventParticipant, Permission
from partner_calendar.repositories import UnitOfWork


class TestParticipantUpsert:

    def test_upsert_overwrites_permission(self, db_session, make_event, alice, bob):
        event = make_event(alice)
        uow = UnitOfWork(db_session)

        first = uow.participants.upsert(event.id, bob.id, Permission.VIEW)
        second = uow.participants.upsert(event.id, bob.id, Permission.EDIT)
        uow.commit()

        assert second.id == first.id
        assert second.permission == Permission.EDIT
        assert db_session.query(EventParticipant).count() == 1

    def test_upsert_over_row_from_another_session(self, db_session, session_factory, make_event, alice, bob):
        event = make_event(alice)
        other = session_factory()
        other.add(EventParticipant(event_id=event.id, user_id=bob.id, permission=Permission.VIEW))
        other.commit()
        other.close()

        uow = UnitOfWork(db_session)
        grant = uow.participants.upsert(event.id, bob.id, Permission.EDIT)
        uow.commit()

        assert grant.permission == Permission.EDIT
        assert db_session.query(EventParticipant).count() == 1

    def test_ensure_view_keeps_existing_grant(self, db_session, make_event, alice, bob):
        event = make_event(alice, grants=[{"user_id": bob.id, "permission": "edit"}])
        uow = UnitOfWork(db_session)

        created = uow.participants.ensure_view(event.id, bob.id)
        uow.commit()

        assert created is False
        assert uow.participants.get_grant(event.id, bob.id).permission == Permission.EDIT

    def test_ensure_view_creates_missing_grant(self, db_session, make_event, alice, bob):
        event = make_event(alice)
        uow = UnitOfWork(db_session)

        assert uow.participants.ensure_view(event.id, bob.id) is True
        uow.commit()
        assert uow.participants.get_grant(event.id, bob.id).permission == Permission.VIEW
