# safespace/schemas/content.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from safespace.schemas.common import RowModel

EXERCISE_CATEGORIES = ["breathing", "grounding", "mindfulness", "gratitude", "relaxation"]
EXERCISE_ICONS = ["🌬️", "🧘", "💭", "🎯", "💚", "🌊", "🌸", "✨"]


class StoryChoice(BaseModel):
    text: str
    nextSceneId: str


class StoryScene(BaseModel):
    id: str
    text: str
    choices: List[StoryChoice] = []
    reflection: Optional[str] = None
    isEnding: bool = False


class StoryContent(BaseModel):
    scenes: List[StoryScene]


class StoryRow(RowModel):
    id: str
    title: str
    description: str
    category: str
    content: StoryContent
    author_id: Optional[str] = None
    is_professional_content: bool = False
    created_at: Optional[datetime] = None


class WellnessExerciseRow(RowModel):
    id: str
    author_id: str
    title: str
    description: str
    instructions: str
    category: str
    icon: Optional[str] = None
    created_at: datetime


class LearningArticleRow(RowModel):
    id: str
    author_id: str
    title: str
    content: str
    emoji: Optional[str] = None
    created_at: datetime


class ExerciseIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    category: str = "breathing"
    icon: Optional[str] = "🌬️"

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        if value not in EXERCISE_CATEGORIES:
            raise ValueError(f"unknown category: {value}")
        return value

    @field_validator("icon")
    @classmethod
    def _known_icon(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in EXERCISE_ICONS:
            raise ValueError(f"unknown icon: {value}")
        return value


class StoryIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = "Mental Health"
