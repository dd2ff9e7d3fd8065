# safespace/controllers/connect.py
import logging
from typing import Dict, List, Optional, Set

from safespace.catalog import TOPIC_VALUES
from safespace.controllers.base import Controller, is_verified_professional
from safespace.schemas.connect import ConnectPostRow, PostCommentRow
from safespace.store import StoreError

logger = logging.getLogger(__name__)

POST_LIMIT = 30


class ConnectController(Controller):
    """Anonymous peer forum, one feed per topic."""

    def __init__(self, session, store, notifier):
        super().__init__(session, store, notifier)
        self.selected_topic = "general"
        self.posts: List[ConnectPostRow] = []
        self.comments: Dict[str, List[PostCommentRow]] = {}
        self.user_likes: Set[str] = set()
        self.expanded_post: Optional[str] = None
        self.posting = False

    def select_topic(self, topic: str) -> List[ConnectPostRow]:
        if topic not in TOPIC_VALUES:
            raise ValueError(f"unknown topic: {topic}")
        self.selected_topic = topic
        self.load_user_likes()
        return self.load_posts()

    def load_posts(self) -> List[ConnectPostRow]:
        try:
            self.posts = self.store.table("connect_posts").select(
                topic=self.selected_topic, order_by="created_at", descending=True, limit=POST_LIMIT
            )
        except StoreError as e:
            logger.error("Error loading posts: %s", e)
        return self.posts

    def load_user_likes(self) -> Set[str]:
        if not self.session.is_authenticated:
            self.user_likes = set()
            return self.user_likes
        try:
            likes = self.store.table("post_likes").select(user_id=self.user_id)
            self.user_likes = {like.post_id for like in likes}
        except StoreError as e:
            logger.error("Error loading likes: %s", e)
        return self.user_likes

    def load_comments(self, post_id: str) -> List[PostCommentRow]:
        try:
            self.comments[post_id] = self.store.table("post_comments").select(
                post_id=post_id, order_by="created_at"
            )
        except StoreError as e:
            logger.error("Error loading comments: %s", e)
        return self.comments.get(post_id, [])

    def expand(self, post_id: str) -> Optional[str]:
        if self.expanded_post == post_id:
            self.expanded_post = None
        else:
            self.expanded_post = post_id
            self.load_comments(post_id)
        return self.expanded_post

    def create_post(self, content: str) -> Optional[ConnectPostRow]:
        content = (content or "").strip()
        if not content or self.posting:
            return None
        user_id = self.require_user("Please sign in to share.")
        if user_id is None:
            return None

        self.posting = True
        try:
            post = self.store.table("connect_posts").insert({
                "user_id": user_id,
                "content": content,
                "topic": self.selected_topic,
                "is_professional": is_verified_professional(self.store, user_id),
            })
        except StoreError as e:
            logger.error("Error creating post: %s", e)
            self.notifier.error("Error", "Failed to share. Please try again.")
            return None
        finally:
            self.posting = False

        self.load_posts()
        self.notifier.info("Shared", "Your thoughts have been shared anonymously.")
        return post

    def _set_likes(self, post_id: str, count: int) -> None:
        self.posts = [
            p.model_copy(update={"likes_count": count}) if p.id == post_id else p
            for p in self.posts
        ]

    def _likes_of(self, post_id: str) -> Optional[int]:
        for p in self.posts:
            if p.id == post_id:
                return p.likes_count
        return None

    def toggle_like(self, post_id: str) -> bool:
        """Optimistic like/unlike, rolled back if the store refuses."""
        user_id = self.require_user()
        if user_id is None:
            return False

        has_liked = post_id in self.user_likes
        previous = self._likes_of(post_id)

        if has_liked:
            self.user_likes = self.user_likes - {post_id}
        else:
            self.user_likes = self.user_likes | {post_id}
        if previous is not None:
            self._set_likes(post_id, max(previous + (-1 if has_liked else 1), 0))

        try:
            if has_liked:
                stored = self.store.remove_like(post_id, user_id)
            else:
                stored = self.store.add_like(post_id, user_id)
        except StoreError as e:
            logger.error("Error toggling like: %s", e)
            if has_liked:
                self.user_likes = self.user_likes | {post_id}
            else:
                self.user_likes = self.user_likes - {post_id}
            if previous is not None:
                self._set_likes(post_id, previous)
            self.notifier.error("Error", "Failed to update like. Please try again.")
            return False

        self._set_likes(post_id, stored)
        return True

    def add_comment(self, post_id: str, content: str) -> Optional[PostCommentRow]:
        content = (content or "").strip()
        if not content:
            return None
        user_id = self.require_user()
        if user_id is None:
            return None

        try:
            comment = self.store.table("post_comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "content": content,
                "is_professional": is_verified_professional(self.store, user_id),
            })
        except StoreError as e:
            logger.error("Error adding comment: %s", e)
            self.notifier.error("Error", "Failed to add comment.")
            return None

        self.load_comments(post_id)
        return comment
