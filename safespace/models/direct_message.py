# safespace/models/direct_message.py
from sqlalchemy import Column, String, Text, DateTime, Boolean

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class DirectMessage(Base):
    __tablename__ = "direct_messages"

    id = Column(String(36), primary_key=True, default=new_id)
    sender_id = Column(String(36), nullable=False, index=True)
    recipient_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
