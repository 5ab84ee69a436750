"""
Collaboration Ledger

Comments and reactions attached to events. The ledger does not check
read access itself: callers verify VisibilityService.can_view first.
"""

from typing import Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from partner_calendar.core.config import Settings
from partner_calendar.core.exceptions import NotFoundException, ValidationException
from partner_calendar.models import Comment, Reaction
from partner_calendar.services.base_service import BaseService

# Matches the length of the reactions.type column
REACTION_TYPE_MAX_LENGTH = 50


class CommentThread(NamedTuple):
    comment: Comment
    replies: List[Comment]


def group_comment_threads(comments: List[Comment]) -> List[CommentThread]:
    """
    Group a flat, oldest-first comment list into top-level threads.

    Replies whose parent is not in the list are dropped; relative order is
    preserved in both levels.
    """
    threads: Dict[int, CommentThread] = {}
    for comment in comments:
        if comment.parent_id is None:
            threads[comment.id] = CommentThread(comment, [])
    for comment in comments:
        if comment.parent_id is not None and comment.parent_id in threads:
            threads[comment.parent_id].replies.append(comment)
    return list(threads.values())


class CollaborationLedger(BaseService):
    """Comments (two levels deep) and one-per-user reactions."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        super().__init__(db, settings, service_name="COLLABORATION_LEDGER")

    def _require_event(self, uow, event_id: int) -> None:
        if not uow.events.exists(event_id):
            raise NotFoundException("Event", event_id)

    # ========================================================================
    # Comments
    # ========================================================================

    def add_comment(self, author_id: int, event_id: int, content: str, parent_id: Optional[int] = None) -> Comment:
        """
        Add a comment or a reply to a top-level comment.

        Raises:
            ValidationException: Empty content, or parent is itself a reply
            NotFoundException: No such event, or parent not on this event
        """
        text = (content or "").strip()
        if not text:
            raise ValidationException("Comment content is required", {"content": "Comment content is required"})

        with self.uow() as uow:
            self._require_event(uow, event_id)
            if parent_id is not None:
                parent = uow.comments.get(parent_id)
                if parent is None or parent.event_id != event_id:
                    raise NotFoundException("Comment", parent_id)
                if parent.parent_id is not None:
                    raise ValidationException(
                        "Replies can only target top-level comments",
                        {"parent_id": "Replies can only target top-level comments"},
                    )
            comment = uow.comments.add(Comment(
                event_id=event_id,
                user_id=author_id,
                content=text,
                parent_id=parent_id,
            ))
            uow.commit()

        self.logger.info(f"User {author_id} commented on event {event_id} (comment {comment.id})")
        return comment

    def list_comments(self, event_id: int) -> List[Comment]:
        """Flat list of the event's comments, oldest first."""
        return self.uow().comments.list_for_event(event_id)

    def list_comment_threads(self, event_id: int) -> List[CommentThread]:
        return group_comment_threads(self.list_comments(event_id))

    # ========================================================================
    # Reactions
    # ========================================================================

    def upsert_reaction(self, user_id: int, event_id: int, reaction_type: str) -> Reaction:
        """
        Replace the user's reaction on an event.

        The replacement is a single INSERT ... ON CONFLICT on the
        (event, user) unique constraint, so concurrent calls by the same
        user leave exactly one reaction carrying the last writer's type.

        Raises:
            ValidationException: Empty or over-long reaction type
            NotFoundException: No such event
        """
        value = (reaction_type or "").strip()
        if not value:
            raise ValidationException("Reaction type is required", {"type": "Reaction type is required"})
        if len(value) > REACTION_TYPE_MAX_LENGTH:
            raise ValidationException(
                "Reaction type is too long",
                {"type": f"Reaction type must be at most {REACTION_TYPE_MAX_LENGTH} characters"},
            )

        with self.uow() as uow:
            self._require_event(uow, event_id)
            reaction = uow.reactions.upsert_for_user(event_id, user_id, value)
            uow.commit()

        self.logger.info(f"User {user_id} reacted '{value}' on event {event_id}")
        return reaction

    def remove_reaction(self, user_id: int, event_id: int) -> None:
        """Remove the user's reaction; no error if there is none."""
        with self.uow() as uow:
            removed = uow.reactions.delete_for_user(event_id, user_id)
            uow.commit()
        if removed:
            self.logger.info(f"User {user_id} removed reaction on event {event_id}")

    def list_reactions(self, event_id: int) -> List[Reaction]:
        return self.uow().reactions.list_for_event(event_id)
