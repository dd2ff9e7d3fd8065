# safespace/schemas/message.py
from datetime import datetime
from typing import Optional

from safespace.schemas.common import RowModel


class DirectMessageRow(RowModel):
    id: str
    sender_id: str
    recipient_id: str
    content: str
    is_read: bool = False
    created_at: datetime


class ProfileRow(RowModel):
    id: str
    user_id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime
    updated_at: datetime
