# safespace/models/content.py
from sqlalchemy import Column, String, Text, DateTime, Boolean, JSON

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class Story(Base):
    __tablename__ = "stories"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False)
    content = Column(JSON, nullable=False)  # {"scenes": [...]}
    author_id = Column(String(36), nullable=True, index=True)
    is_professional_content = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class WellnessExercise(Base):
    __tablename__ = "wellness_exercises"

    id = Column(String(36), primary_key=True, default=new_id)
    author_id = Column(String(36), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    instructions = Column(Text, nullable=False)
    category = Column(String(50), nullable=False)
    icon = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class LearningArticle(Base):
    __tablename__ = "learning_articles"

    id = Column(String(36), primary_key=True, default=new_id)
    author_id = Column(String(36), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    emoji = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
