# safespace/models/__init__.py
from safespace.models.chat import ChatMessage
from safespace.models.journal import JournalEntry
from safespace.models.connect import ConnectPost, PostComment, PostLike
from safespace.models.mood import MoodEntry
from safespace.models.professional import Professional, UserRole
from safespace.models.profile import Profile
from safespace.models.direct_message import DirectMessage
from safespace.models.content import Story, WellnessExercise, LearningArticle

__all__ = [
    "ChatMessage",
    "JournalEntry",
    "ConnectPost",
    "PostComment",
    "PostLike",
    "MoodEntry",
    "Professional",
    "UserRole",
    "Profile",
    "DirectMessage",
    "Story",
    "WellnessExercise",
    "LearningArticle",
]
