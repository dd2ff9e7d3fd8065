# safespace/models/journal.py
from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    emotion_tags = Column(JSON, nullable=False, default=list)
    # Written once at insert, after the reflection stream has been read
    ai_response = Column(Text, nullable=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
