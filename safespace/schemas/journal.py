# safespace/schemas/journal.py
from datetime import datetime
from typing import List, Optional

from safespace.schemas.common import RowModel


class JournalEntryRow(RowModel):
    id: str
    user_id: str
    content: str
    emotion_tags: List[str] = []
    ai_response: Optional[str] = None
    is_anonymous: bool = False
    created_at: datetime
