# safespace/controllers/wellness.py
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from safespace.catalog import BUILTIN_EXERCISES, MOOD_VALUES, MOODS
from safespace.controllers.base import Controller
from safespace.schemas.mood import MoodEntryRow
from safespace.store import StoreError

logger = logging.getLogger(__name__)

MOOD_LIMIT = 7


@dataclass
class BoxBreathing:
    """4-4-4-4 breathing cycle driven by one tick per second."""

    phases = ("Breathe In", "Hold", "Breathe Out", "Hold")
    seconds_per_phase: int = 4
    phase_index: int = 0
    remaining: int = field(init=False)
    cycles: int = 0

    def __post_init__(self):
        self.remaining = self.seconds_per_phase

    @property
    def phase(self) -> str:
        return self.phases[self.phase_index]

    def tick(self) -> str:
        self.remaining -= 1
        if self.remaining <= 0:
            self.phase_index = (self.phase_index + 1) % len(self.phases)
            if self.phase_index == 0:
                self.cycles += 1
            self.remaining = self.seconds_per_phase
        return self.phase


def gratitude_ready(items: Iterable[str]) -> bool:
    return any((item or "").strip() for item in items)


class WellnessController(Controller):
    moods = MOODS

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.mood_entries: List[MoodEntryRow] = []
        self.active_exercise: Optional[Dict] = None

    def load_mood_entries(self) -> List[MoodEntryRow]:
        if not self.session.is_authenticated:
            self.mood_entries = []
            return self.mood_entries
        try:
            self.mood_entries = self.store.table("mood_entries").select(
                user_id=self.user_id, order_by="created_at", descending=True, limit=MOOD_LIMIT
            )
        except StoreError as e:
            logger.error("Error loading moods: %s", e)
        return self.mood_entries

    def save_mood(self, mood: str, note: Optional[str] = None) -> Optional[MoodEntryRow]:
        if mood not in MOOD_VALUES:
            raise ValueError(f"unknown mood: {mood}")
        user_id = self.require_user("Sign in to track moods")
        if user_id is None:
            return None

        note = (note or "").strip() or None
        try:
            entry = self.store.table("mood_entries").insert({"user_id": user_id, "mood": mood, "note": note})
        except StoreError as e:
            logger.error("Error saving mood: %s", e, exc_info=True)
            self.notifier.error("Error", "Failed to save mood. Please try again.")
            return None

        self.mood_entries = ([entry] + self.mood_entries)[:MOOD_LIMIT]
        self.notifier.info("Mood recorded", "Thanks for checking in with yourself.")
        return entry

    def list_exercises(self, category: Optional[str] = None) -> List[Dict]:
        """Built-in exercises followed by the ones professionals wrote."""
        exercises = [dict(e, steps=list(e["steps"])) for e in BUILTIN_EXERCISES]
        try:
            stored = self.store.table("wellness_exercises").select(order_by="created_at", descending=True)
        except StoreError as e:
            logger.error("Error loading exercises: %s", e)
            stored = []

        for row in stored:
            steps = [line.strip() for line in row.instructions.splitlines() if line.strip()]
            exercises.append({
                "id": row.id,
                "title": row.title,
                "description": row.description,
                "category": row.category,
                "icon": row.icon,
                "steps": steps,
                "author_id": row.author_id,
            })

        if category:
            exercises = [e for e in exercises if e["category"] == category]
        return exercises

    def start_exercise(self, exercise_id: str) -> Dict:
        for exercise in self.list_exercises():
            if exercise["id"] == exercise_id:
                self.active_exercise = exercise
                return exercise
        raise KeyError(exercise_id)

    def stop_exercise(self) -> None:
        self.active_exercise = None

    gratitude_ready = staticmethod(gratitude_ready)
