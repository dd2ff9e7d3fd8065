# safespace/controllers/reflect.py
import logging
from typing import List, Optional

from safespace.catalog import EMOTION_TAGS, REFLECTION_PROMPTS
from safespace.controllers.base import Controller
from safespace.controllers.notify import Notifier
from safespace.controllers.session import SessionContext
from safespace.schemas.chat import ChatTurn
from safespace.schemas.journal import JournalEntryRow
from safespace.services.relay_client import RelayClient, RelayError, RelayUnavailable
from safespace.store import StoreError, TableStore

logger = logging.getLogger(__name__)

ENTRY_LIMIT = 20


class ReflectController(Controller):
    """Private journal with an AI reflection attached to each entry."""

    def __init__(self, session: SessionContext, store: TableStore, notifier: Notifier, relay: RelayClient):
        super().__init__(session, store, notifier)
        self.relay = relay
        self.entries: List[JournalEntryRow] = []
        self.draft = ""
        self.selected_tags: List[str] = []
        self.expanded_entry: Optional[str] = None
        self.saving = False

    @property
    def _table(self):
        return self.store.table("journal_entries")

    def load_entries(self) -> List[JournalEntryRow]:
        if not self.session.is_authenticated:
            self.entries = []
            return self.entries
        try:
            self.entries = self._table.select(
                user_id=self.user_id, order_by="created_at", descending=True, limit=ENTRY_LIMIT
            )
        except StoreError as e:
            logger.error("Error loading entries: %s", e)
        return self.entries

    def toggle_tag(self, tag: str) -> List[str]:
        if tag not in EMOTION_TAGS:
            raise ValueError(f"unknown emotion tag: {tag}")
        if tag in self.selected_tags:
            self.selected_tags = [t for t in self.selected_tags if t != tag]
        else:
            self.selected_tags = self.selected_tags + [tag]
        return self.selected_tags

    def use_prompt(self, prompt: str) -> str:
        if prompt not in REFLECTION_PROMPTS:
            raise ValueError(f"unknown prompt: {prompt}")
        self.draft = prompt + " "
        return self.draft

    def toggle_expanded(self, entry_id: str) -> Optional[str]:
        self.expanded_entry = None if self.expanded_entry == entry_id else entry_id
        return self.expanded_entry

    async def save_entry(self) -> Optional[JournalEntryRow]:
        content = self.draft.strip()
        if not content or self.saving:
            return None

        user_id = self.require_user("Please sign in to save your reflections.")
        if user_id is None:
            return None

        self.saving = True
        try:
            try:
                ai_response = await self.relay.complete([ChatTurn(role="user", content=content)], "reflect")
            except RelayError as e:
                # The entry is still worth keeping without a reflection
                logger.warning("Reflection unavailable: %s", e)
                ai_response = ""

            entry = self._table.insert({
                "user_id": user_id,
                "content": content,
                "emotion_tags": list(self.selected_tags),
                "ai_response": ai_response or None,
            })
        except (RelayUnavailable, StoreError) as e:
            logger.error("Error saving entry: %s", e, exc_info=True)
            self.notifier.error("Error", "Failed to save your reflection. Please try again.")
            return None
        finally:
            self.saving = False

        self.entries = [entry] + self.entries
        self.draft = ""
        self.selected_tags = []
        self.expanded_entry = entry.id
        self.notifier.info("Reflection saved", "Your thoughts have been safely stored.")
        return entry

    def delete_entry(self, entry_id: str) -> bool:
        user_id = self.session.user_id
        if not user_id:
            return False
        try:
            deleted = self._table.delete(id=entry_id, user_id=user_id)
        except StoreError as e:
            logger.error("Error deleting entry: %s", e)
            self.notifier.error("Error", "Failed to delete entry.")
            return False

        if not deleted:
            self.notifier.error("Error", "Failed to delete entry.")
            return False

        self.entries = [e for e in self.entries if e.id != entry_id]
        self.notifier.info("Entry deleted")
        return True
