# safespace/models/connect.py
from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, ForeignKey, UniqueConstraint

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class ConnectPost(Base):
    __tablename__ = "connect_posts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    topic = Column(String(32), nullable=False, index=True)
    is_professional = Column(Boolean, nullable=False, default=False)
    # Denormalised; only ever changed by an atomic +/-1 next to the post_likes row
    likes_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)


class PostComment(Base):
    __tablename__ = "post_comments"

    id = Column(String(36), primary_key=True, default=new_id)
    post_id = Column(String(36), ForeignKey("connect_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_professional = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class PostLike(Base):
    __tablename__ = "post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),)

    id = Column(String(36), primary_key=True, default=new_id)
    post_id = Column(String(36), ForeignKey("connect_posts.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
