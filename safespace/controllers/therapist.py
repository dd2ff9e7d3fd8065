# safespace/controllers/therapist.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from sqlalchemy import and_, or_

from safespace.catalog import STORY_TEMPLATE
from safespace.controllers.base import Controller, is_verified_professional
from safespace.models import DirectMessage
from safespace.schemas.content import ExerciseIn, StoryIn, StoryRow, WellnessExerciseRow
from safespace.schemas.message import DirectMessageRow
from safespace.schemas.professional import ProfessionalRow
from safespace.store import StoreError, TableStore

logger = logging.getLogger(__name__)

ANONYMOUS_NAME = "Anonymous User"


def load_thread(store: TableStore, me: str, other: str) -> List[DirectMessageRow]:
    """Both directions of a direct-message thread, oldest first."""
    return store.table("direct_messages").select(
        where=[or_(
            and_(DirectMessage.sender_id == me, DirectMessage.recipient_id == other),
            and_(DirectMessage.sender_id == other, DirectMessage.recipient_id == me),
        )],
        order_by="created_at",
    )


def _parse(schema, form):
    if isinstance(form, schema):
        return form
    return schema.model_validate(form)


class TherapistDashboard(Controller):
    """Workspace for verified professionals: own content and inbox."""

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.authorized = False
        self.professional: Optional[ProfessionalRow] = None
        self.exercises: List[WellnessExerciseRow] = []
        self.stories: List[StoryRow] = []
        self.inbox: List[DirectMessageRow] = []

    def load(self) -> bool:
        user_id = self.require_user()
        if user_id is None:
            return False
        if not is_verified_professional(self.store, user_id):
            self.authorized = False
            self.notifier.error("Not authorized", "You need a professional account.")
            return False

        try:
            self.professional = self.store.table("professionals").first(user_id=user_id)
            self.exercises = self.store.table("wellness_exercises").select(
                author_id=user_id, order_by="created_at", descending=True
            )
            self.stories = self.store.table("stories").select(
                author_id=user_id, order_by="created_at", descending=True
            )
            self.inbox = self.store.table("direct_messages").select(
                recipient_id=user_id, order_by="created_at", descending=True
            )
        except StoreError as e:
            logger.error("Error loading dashboard: %s", e, exc_info=True)
            self.notifier.error("Error", "Failed to load your dashboard.")
            return False

        self.authorized = True
        return True

    @property
    def unread_count(self) -> int:
        return sum(1 for m in self.inbox if not m.is_read)

    def _guard(self) -> Optional[str]:
        if not self.authorized:
            self.notifier.error("Not authorized", "You need a professional account.")
            return None
        return self.user_id

    def create_exercise(self, form: Union[ExerciseIn, Dict[str, Any]]) -> Optional[WellnessExerciseRow]:
        user_id = self._guard()
        if user_id is None:
            return None
        try:
            data = _parse(ExerciseIn, form)
        except ValidationError:
            self.notifier.error("Missing information", "Please fill in all exercise fields.")
            return None

        try:
            exercise = self.store.table("wellness_exercises").insert(dict(data.model_dump(), author_id=user_id))
        except StoreError as e:
            logger.error("Error creating exercise: %s", e)
            self.notifier.error("Error", "Failed to create exercise.")
            return None

        self.exercises = [exercise] + self.exercises
        self.notifier.info("Exercise created!")
        return exercise

    def delete_exercise(self, exercise_id: str) -> bool:
        user_id = self._guard()
        if user_id is None:
            return False
        try:
            deleted = self.store.table("wellness_exercises").delete(id=exercise_id, author_id=user_id)
        except StoreError as e:
            logger.error("Error deleting exercise: %s", e)
            self.notifier.error("Error", "Failed to delete exercise.")
            return False
        self.exercises = [e for e in self.exercises if e.id != exercise_id]
        if deleted:
            self.notifier.info("Exercise deleted")
        return bool(deleted)

    def create_story(self, form: Union[StoryIn, Dict[str, Any]]) -> Optional[StoryRow]:
        user_id = self._guard()
        if user_id is None:
            return None
        try:
            data = _parse(StoryIn, form)
        except ValidationError:
            self.notifier.error("Missing information", "Please add a title and a description.")
            return None

        try:
            story = self.store.table("stories").insert(dict(
                data.model_dump(),
                content=STORY_TEMPLATE,
                author_id=user_id,
                is_professional_content=True,
            ))
        except StoreError as e:
            logger.error("Error creating story: %s", e)
            self.notifier.error("Error", "Failed to create story.")
            return None

        self.stories = [story] + self.stories
        self.notifier.info("Story created!")
        return story

    def delete_story(self, story_id: str) -> bool:
        user_id = self._guard()
        if user_id is None:
            return False
        try:
            deleted = self.store.table("stories").delete(id=story_id, author_id=user_id)
        except StoreError as e:
            logger.error("Error deleting story: %s", e)
            self.notifier.error("Error", "Failed to delete story.")
            return False
        self.stories = [s for s in self.stories if s.id != story_id]
        if deleted:
            self.notifier.info("Story deleted")
        return bool(deleted)

    def reply(self, message_id: str, content: str) -> Optional[DirectMessageRow]:
        user_id = self._guard()
        content = (content or "").strip()
        if user_id is None or not content:
            return None

        messages = self.store.table("direct_messages")
        try:
            original = messages.first(id=message_id, recipient_id=user_id)
            if original is None:
                self.notifier.error("Error", "Message not found.")
                return None
            reply = messages.insert({
                "sender_id": user_id,
                "recipient_id": original.sender_id,
                "content": content,
            })
            messages.update({"is_read": True}, id=message_id)
        except StoreError as e:
            logger.error("Error sending reply: %s", e, exc_info=True)
            self.notifier.error("Error", "Failed to send reply.")
            return None

        self.inbox = [
            m.model_copy(update={"is_read": True}) if m.id == message_id else m
            for m in self.inbox
        ]
        self.notifier.info("Reply sent!")
        return reply


class TherapistChat(Controller):
    """User side of a private thread with one verified professional."""

    def __init__(self, session, store, notifier, therapist_id: str):
        super().__init__(session, store, notifier)
        self.therapist_id = therapist_id
        self.therapist: Optional[ProfessionalRow] = None
        self.messages: List[DirectMessageRow] = []
        self.sending = False

    def load(self) -> bool:
        user_id = self.require_user("Please sign in to message a professional.")
        if user_id is None:
            return False
        try:
            self.therapist = self.store.table("professionals").first(
                user_id=self.therapist_id, status="verified"
            )
            if self.therapist is None:
                self.notifier.error("Not found", "This professional is not available.")
                return False
            self.messages = load_thread(self.store, user_id, self.therapist_id)
        except StoreError as e:
            logger.error("Error loading conversation: %s", e)
            self.notifier.error("Error", "Failed to load messages.")
            return False
        return True

    def send(self, content: str) -> Optional[DirectMessageRow]:
        content = (content or "").strip()
        if not content or self.sending or self.therapist is None:
            return None
        user_id = self.require_user()
        if user_id is None:
            return None

        self.sending = True
        try:
            message = self.store.table("direct_messages").insert({
                "sender_id": user_id,
                "recipient_id": self.therapist_id,
                "content": content,
            })
        except StoreError as e:
            logger.error("Error sending message: %s", e)
            self.notifier.error("Error", "Failed to send message. Please try again.")
            return None
        finally:
            self.sending = False

        self.messages = self.messages + [message]
        return message


@dataclass
class Conversation:
    user_id: str
    display_name: str
    last_message: str
    last_at: datetime
    unread_count: int = 0


class TherapistConversations(Controller):
    """Professional side: every user who has written, newest activity first."""

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.conversations: List[Conversation] = []
        self.active_user: Optional[str] = None
        self.messages: List[DirectMessageRow] = []

    def load_conversations(self) -> List[Conversation]:
        me = self.require_user()
        if me is None:
            return []

        try:
            rows = self.store.table("direct_messages").select(
                where=[or_(DirectMessage.sender_id == me, DirectMessage.recipient_id == me)],
                order_by="created_at",
                descending=True,
            )
        except StoreError as e:
            logger.error("Error loading conversations: %s", e)
            return self.conversations

        grouped: Dict[str, Conversation] = {}
        for row in rows:
            other = row.recipient_id if row.sender_id == me else row.sender_id
            conv = grouped.get(other)
            if conv is None:
                conv = grouped[other] = Conversation(
                    user_id=other,
                    display_name=ANONYMOUS_NAME,
                    last_message=row.content,
                    last_at=row.created_at,
                )
            if row.recipient_id == me and not row.is_read:
                conv.unread_count += 1

        if grouped:
            try:
                profiles = self.store.table("profiles").select(user_id=list(grouped))
            except StoreError as e:
                logger.warning("Could not load display names: %s", e)
                profiles = []
            for profile in profiles:
                if profile.display_name:
                    grouped[profile.user_id].display_name = profile.display_name

        self.conversations = list(grouped.values())
        return self.conversations

    def open(self, user_id: str) -> List[DirectMessageRow]:
        me = self.require_user()
        if me is None:
            return []

        self.active_user = user_id
        try:
            self.messages = load_thread(self.store, me, user_id)
            self.store.table("direct_messages").update(
                {"is_read": True}, sender_id=user_id, recipient_id=me, is_read=False
            )
        except StoreError as e:
            logger.error("Error opening conversation: %s", e)
            self.notifier.error("Error", "Failed to load messages.")
            return self.messages

        for conv in self.conversations:
            if conv.user_id == user_id:
                conv.unread_count = 0
        return self.messages

    def send(self, content: str) -> Optional[DirectMessageRow]:
        content = (content or "").strip()
        if not content or self.active_user is None:
            return None
        me = self.require_user()
        if me is None:
            return None

        try:
            message = self.store.table("direct_messages").insert({
                "sender_id": me,
                "recipient_id": self.active_user,
                "content": content,
            })
        except StoreError as e:
            logger.error("Error sending message: %s", e)
            self.notifier.error("Error", "Failed to send message. Please try again.")
            return None

        self.messages = self.messages + [message]
        for conv in self.conversations:
            if conv.user_id == self.active_user:
                conv.last_message = message.content
                conv.last_at = message.created_at
        self.conversations.sort(key=lambda c: c.last_at, reverse=True)
        return message
