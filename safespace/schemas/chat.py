# safespace/schemas/chat.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from safespace.schemas.common import RowModel

Role = Literal["user", "assistant"]


class ChatTurn(BaseModel):
    role: Role
    content: str


class ChatMessageRow(RowModel):
    id: str
    user_id: str
    role: Role
    content: str
    created_at: datetime

    def as_turn(self) -> ChatTurn:
        return ChatTurn(role=self.role, content=self.content)
