# safespace/controllers/stories.py
import logging
from typing import List, Optional

from safespace.catalog import BUILTIN_STORIES
from safespace.controllers.base import Controller
from safespace.schemas.content import StoryRow, StoryScene
from safespace.store import StoreError

logger = logging.getLogger(__name__)

START_SCENE = "start"


class StoryError(Exception):
    pass


class StoryPlayer(Controller):
    """Walks a branching story one scene at a time."""

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.story: Optional[StoryRow] = None
        self.scene_id: Optional[str] = None
        self.path: List[str] = []

    def list_stories(self) -> List[StoryRow]:
        stories = list(BUILTIN_STORIES)
        try:
            stories.extend(self.store.table("stories").select(order_by="created_at", descending=True))
        except StoreError as e:
            logger.error("Error loading stories: %s", e)
        return stories

    def _scene(self, scene_id: str) -> StoryScene:
        for scene in self.story.content.scenes:
            if scene.id == scene_id:
                return scene
        raise StoryError(f"story {self.story.id} has no scene '{scene_id}'")

    def open(self, story_id: str) -> StoryScene:
        for story in self.list_stories():
            if story.id == story_id:
                self.story = story
                break
        else:
            raise StoryError(f"unknown story: {story_id}")

        scene = self._scene(START_SCENE)
        self.scene_id = scene.id
        self.path = [scene.id]
        return scene

    @property
    def current_scene(self) -> Optional[StoryScene]:
        if self.story is None or self.scene_id is None:
            return None
        return self._scene(self.scene_id)

    @property
    def is_finished(self) -> bool:
        scene = self.current_scene
        return bool(scene and scene.isEnding)

    def choose(self, choice_index: int) -> StoryScene:
        scene = self.current_scene
        if scene is None:
            raise StoryError("no story is open")
        if not 0 <= choice_index < len(scene.choices):
            raise StoryError(f"scene '{scene.id}' has no choice {choice_index}")

        next_scene = self._scene(scene.choices[choice_index].nextSceneId)
        self.scene_id = next_scene.id
        self.path.append(next_scene.id)
        return next_scene

    def restart(self) -> StoryScene:
        if self.story is None:
            raise StoryError("no story is open")
        return self.open(self.story.id)

    def reset(self) -> None:
        self.story = None
        self.scene_id = None
        self.path = []
