# safespace/schemas/mood.py
from datetime import datetime
from typing import Optional

from safespace.schemas.common import RowModel


class MoodEntryRow(RowModel):
    id: str
    user_id: str
    mood: str
    note: Optional[str] = None
    created_at: datetime
