# safespace/controllers/optimistic.py
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, List, Union

from safespace.core.timezone import utc_now


@dataclass
class PendingMessage:
    """Shown locally before the store has the row."""

    local_id: str
    role: str
    content: str
    created_at: datetime = field(default_factory=utc_now)

    @property
    def id(self) -> str:
        return self.local_id

    @property
    def is_pending(self) -> bool:
        return True


@dataclass
class ConfirmedMessage:
    row: Any

    @property
    def id(self) -> str:
        return self.row.id

    @property
    def role(self) -> str:
        return self.row.role

    @property
    def content(self) -> str:
        return self.row.content

    @property
    def created_at(self) -> datetime:
        return self.row.created_at

    @property
    def is_pending(self) -> bool:
        return False


LocalMessage = Union[PendingMessage, ConfirmedMessage]


class MessageList:
    """Visible conversation: confirmed rows plus in-flight pending entries."""

    def __init__(self, rows=()):
        self._items: List[LocalMessage] = [ConfirmedMessage(r) for r in rows]

    def __iter__(self) -> Iterator[LocalMessage]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> LocalMessage:
        return self._items[index]

    def reset(self, rows) -> None:
        self._items = [ConfirmedMessage(r) for r in rows]

    def clear(self) -> None:
        self._items = []

    def append_pending(self, role: str, content: str) -> str:
        local_id = f"temp-{role}-{uuid.uuid4().hex}"
        self._items.append(PendingMessage(local_id=local_id, role=role, content=content))
        return local_id

    def pending(self, local_id: str) -> PendingMessage:
        for item in self._items:
            if isinstance(item, PendingMessage) and item.local_id == local_id:
                return item
        raise KeyError(local_id)

    def update_pending(self, local_id: str, content: str) -> None:
        self.pending(local_id).content = content

    def confirm(self, local_id: str, row) -> None:
        """Swap the pending entry for the stored row, keeping its position."""
        for i, item in enumerate(self._items):
            if isinstance(item, PendingMessage) and item.local_id == local_id:
                self._items[i] = ConfirmedMessage(row)
                return
        raise KeyError(local_id)

    def discard(self, local_id: str) -> None:
        self._items = [
            item for item in self._items
            if not (isinstance(item, PendingMessage) and item.local_id == local_id)
        ]

    def discard_pending(self) -> int:
        before = len(self._items)
        self._items = [item for item in self._items if isinstance(item, ConfirmedMessage)]
        return before - len(self._items)

    def rows(self) -> list:
        return [item.row for item in self._items if isinstance(item, ConfirmedMessage)]
