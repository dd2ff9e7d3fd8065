# safespace/models/mood.py
from sqlalchemy import Column, String, Text, DateTime

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    mood = Column(String(32), nullable=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
