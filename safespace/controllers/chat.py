# safespace/controllers/chat.py
import logging
from typing import Optional

from safespace.controllers.base import Controller
from safespace.controllers.notify import Notifier
from safespace.controllers.optimistic import MessageList
from safespace.controllers.session import SessionContext
from safespace.core.timezone import utc_now
from safespace.schemas.chat import ChatTurn
from safespace.services.relay_client import RelayClient, RelayError, RelayUnavailable
from safespace.store import StoreError, TableStore

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50
SEND_FAILED = "Failed to send message. Please try again."


class ChatController(Controller):
    """AI advisor conversation."""

    def __init__(self, session: SessionContext, store: TableStore, notifier: Notifier, relay: RelayClient):
        super().__init__(session, store, notifier)
        self.relay = relay
        self.messages = MessageList()
        self.loading = False

    @property
    def _table(self):
        return self.store.table("chat_messages")

    def load_history(self) -> MessageList:
        if not self.session.is_authenticated:
            self.messages.clear()
            return self.messages

        try:
            latest = self._table.select(
                user_id=self.user_id, order_by="created_at", descending=True, limit=HISTORY_LIMIT
            )
        except StoreError as e:
            logger.error("Error loading messages: %s", e)
            return self.messages

        self.messages.reset(reversed(latest))
        return self.messages

    async def send(self, text: str) -> bool:
        """Send one user turn and stream the advisor's answer into the list.

        Both rows are written only after the stream has ended, so a failed
        call leaves the stored history untouched.
        """
        text = (text or "").strip()
        if not text or self.loading:
            return False

        user_id = self.require_user("Please sign in to chat with our AI advisor.")
        if user_id is None:
            return False

        self.loading = True
        user_local = self.messages.append_pending("user", text)
        sent_at = self.messages.pending(user_local).created_at
        assistant_local: Optional[str] = None

        try:
            history = [row.as_turn() for row in self.messages.rows()]
            history.append(ChatTurn(role="user", content=text))

            reply = ""
            async for fragment in self.relay.stream_reply(history, "chat"):
                if assistant_local is None:
                    assistant_local = self.messages.append_pending("assistant", "")
                reply += fragment
                self.messages.update_pending(assistant_local, reply)

            if assistant_local is None:
                assistant_local = self.messages.append_pending("assistant", "")

            user_row, assistant_row = self._table.insert_many([
                {"user_id": user_id, "role": "user", "content": text, "created_at": sent_at},
                {"user_id": user_id, "role": "assistant", "content": reply, "created_at": utc_now()},
            ])
            self.messages.confirm(user_local, user_row)
            self.messages.confirm(assistant_local, assistant_row)
            return True

        except RelayError as e:
            logger.error("Chat relay refused the request: %s", e)
            if e.status_code == 429:
                self.notifier.error("Rate limited", "Please wait a moment and try again.")
            else:
                self.notifier.error("Error", SEND_FAILED)
            self.messages.discard_pending()
            return False

        except (RelayUnavailable, StoreError) as e:
            logger.error("Chat send failed: %s", e, exc_info=True)
            self.notifier.error("Error", SEND_FAILED)
            self.messages.discard_pending()
            return False

        finally:
            self.loading = False

    def clear_history(self) -> bool:
        user_id = self.session.user_id
        if not user_id:
            return False

        try:
            deleted = self._table.delete(user_id=user_id)
        except StoreError as e:
            logger.error("Failed to clear chat: %s", e)
            self.notifier.error("Error", "Failed to clear chat.")
            return False

        logger.info("cleared %d chat message(s) for %s", deleted, user_id)
        self.messages.clear()
        self.notifier.info("Chat cleared", "Your chat history has been cleared.")
        return True
