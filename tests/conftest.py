"""
Shared fixtures: an in-memory SQLite database per test, services bound to
it, a few registered users and an API client wired to the same database.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from partner_calendar.core.config import Settings, get_settings
from partner_calendar.core.database import get_db
from partner_calendar.main import app
from partner_calendar.models import Base, User
from partner_calendar.services import (
    CollaborationLedger,
    EventLifecycleService,
    PartnerGraphService,
    VisibilityService,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://")


# ============================================================================
# Users
# ============================================================================

@pytest.fixture
def make_user(db_session):
    def _make(username: str) -> User:
        user = User(username=username, email=f"{username}@example.com", full_name=username.title())
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def carol(make_user):
    return make_user("carol")


# ============================================================================
# Services
# ============================================================================

@pytest.fixture
def partner_graph(db_session, settings):
    return PartnerGraphService(db_session, settings)


@pytest.fixture
def visibility(db_session, settings, partner_graph):
    return VisibilityService(db_session, settings, partner_graph=partner_graph)


@pytest.fixture
def event_service(db_session, settings, visibility):
    return EventLifecycleService(db_session, settings, visibility=visibility)


@pytest.fixture
def ledger(db_session, settings):
    return CollaborationLedger(db_session, settings)


@pytest.fixture
def make_event(event_service):
    def _make(owner, title="Event", privacy="private", on=date(2024, 3, 1),
              start_time="09:00", period="morning", grants=()):
        draft = {
            "title": title,
            "date": on.isoformat(),
            "start_time": start_time,
            "period": period,
            "privacy": privacy,
        }
        return event_service.create_event(owner.id, draft, grants)
    return _make


@pytest.fixture
def partners(partner_graph):
    """Have `invitee` accept an invitation from `inviter`."""
    def _link(inviter, invitee):
        link = partner_graph.invite_partner(inviter.id, invitee.email)
        return partner_graph.respond_to_request(invitee.id, link.id, "accepted")
    return _link


# ============================================================================
# API
# ============================================================================

@pytest.fixture
def client(session_factory, settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
