"""
Tests for comments, reply threads and one-per-user reactions.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from partner_calendar.core.exceptions import NotFoundException, ValidationException
from partner_calendar.models import Reaction
from partner_calendar.services import group_comment_threads


@pytest.fixture
def event(make_event, alice):
    return make_event(alice, "Dinner", privacy="public")


class TestComments:

    def test_comments_listed_oldest_first(self, ledger, event, alice, bob):
        first = ledger.add_comment(bob.id, event.id, "Looks fun")
        second = ledger.add_comment(alice.id, event.id, "Join us")

        assert [c.id for c in ledger.list_comments(event.id)] == [first.id, second.id]

    def test_content_is_stripped_and_required(self, ledger, event, bob):
        assert ledger.add_comment(bob.id, event.id, "  hi  ").content == "hi"
        with pytest.raises(ValidationException) as exc:
            ledger.add_comment(bob.id, event.id, "   ")
        assert "content" in exc.value.errors

    def test_comment_on_missing_event(self, ledger, bob):
        with pytest.raises(NotFoundException):
            ledger.add_comment(bob.id, 404, "Hello?")

    def test_reply_to_top_level_comment(self, ledger, event, alice, bob):
        top = ledger.add_comment(bob.id, event.id, "Can I bring wine?")
        reply = ledger.add_comment(alice.id, event.id, "Please do", parent_id=top.id)

        assert reply.parent_id == top.id

    def test_reply_to_reply_is_rejected(self, ledger, event, alice, bob):
        top = ledger.add_comment(bob.id, event.id, "Can I bring wine?")
        reply = ledger.add_comment(alice.id, event.id, "Please do", parent_id=top.id)

        with pytest.raises(ValidationException) as exc:
            ledger.add_comment(bob.id, event.id, "Red or white?", parent_id=reply.id)
        assert "parent_id" in exc.value.errors

    def test_parent_must_belong_to_same_event(self, ledger, make_event, event, alice, bob):
        other = make_event(alice, "Other", privacy="public")
        foreign = ledger.add_comment(bob.id, other.id, "Elsewhere")

        with pytest.raises(NotFoundException):
            ledger.add_comment(bob.id, event.id, "Reply", parent_id=foreign.id)
        with pytest.raises(NotFoundException):
            ledger.add_comment(bob.id, event.id, "Reply", parent_id=999)

    def test_threads_group_replies(self, ledger, event, alice, bob):
        first = ledger.add_comment(bob.id, event.id, "First")
        second = ledger.add_comment(alice.id, event.id, "Second")
        r1 = ledger.add_comment(alice.id, event.id, "Reply 1", parent_id=first.id)
        r2 = ledger.add_comment(bob.id, event.id, "Reply 2", parent_id=first.id)

        threads = ledger.list_comment_threads(event.id)

        assert [t.comment.id for t in threads] == [first.id, second.id]
        assert [r.id for r in threads[0].replies] == [r1.id, r2.id]
        assert threads[1].replies == []


class TestGroupCommentThreads:

    class FakeComment:
        def __init__(self, id, parent_id=None):
            self.id = id
            self.parent_id = parent_id

    def test_orphan_replies_are_dropped(self):
        comments = [self.FakeComment(1), self.FakeComment(2, parent_id=7), self.FakeComment(3, parent_id=1)]

        threads = group_comment_threads(comments)

        assert [(t.comment.id, [r.id for r in t.replies]) for t in threads] == [(1, [3])]

    def test_empty(self):
        assert group_comment_threads([]) == []


class TestReactions:

    def test_reaction_replaces_previous(self, ledger, db_session, event, bob):
        ledger.upsert_reaction(bob.id, event.id, "heart")
        ledger.upsert_reaction(bob.id, event.id, "fire")

        reactions = ledger.list_reactions(event.id)
        assert [(r.user_id, r.type) for r in reactions] == [(bob.id, "fire")]
        assert db_session.query(Reaction).count() == 1

    def test_reactions_per_user(self, ledger, event, alice, bob):
        ledger.upsert_reaction(alice.id, event.id, "heart")
        ledger.upsert_reaction(bob.id, event.id, "heart")

        assert {r.user_id for r in ledger.list_reactions(event.id)} == {alice.id, bob.id}

    def test_empty_type_rejected(self, ledger, event, bob):
        with pytest.raises(ValidationException) as exc:
            ledger.upsert_reaction(bob.id, event.id, " ")
        assert "type" in exc.value.errors

    def test_type_longer_than_column_rejected(self, ledger, db_session, event, bob):
        with pytest.raises(ValidationException) as exc:
            ledger.upsert_reaction(bob.id, event.id, "x" * 51)

        assert "type" in exc.value.errors
        assert db_session.query(Reaction).count() == 0
        assert ledger.upsert_reaction(bob.id, event.id, "x" * 50).type == "x" * 50

    def test_replacing_keeps_single_row(self, ledger, event, bob):
        first = ledger.upsert_reaction(bob.id, event.id, "heart")
        second = ledger.upsert_reaction(bob.id, event.id, "fire")

        assert second.id == first.id
        assert second.type == "fire"

    def test_reaction_written_by_another_session_is_replaced(self, ledger, session_factory, event, bob):
        """A row committed elsewhere is overwritten instead of raising a conflict."""
        other = session_factory()
        other.add(Reaction(event_id=event.id, user_id=bob.id, type="heart"))
        other.commit()
        other.close()

        reaction = ledger.upsert_reaction(bob.id, event.id, "fire")

        assert reaction.type == "fire"
        assert [(r.user_id, r.type) for r in ledger.list_reactions(event.id)] == [(bob.id, "fire")]

    def test_reaction_on_missing_event(self, ledger, bob):
        with pytest.raises(NotFoundException):
            ledger.upsert_reaction(bob.id, 404, "heart")

    def test_remove_is_idempotent(self, ledger, event, bob):
        ledger.upsert_reaction(bob.id, event.id, "heart")

        ledger.remove_reaction(bob.id, event.id)
        ledger.remove_reaction(bob.id, event.id)

        assert ledger.list_reactions(event.id) == []

    def test_unique_constraint_blocks_duplicates(self, db_session, event, bob):
        db_session.add(Reaction(event_id=event.id, user_id=bob.id, type="heart"))
        db_session.add(Reaction(event_id=event.id, user_id=bob.id, type="fire"))

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
