# safespace/controllers/learn.py
import logging
from typing import Dict, List

from safespace.catalog import LEARN_CARDS
from safespace.controllers.base import Controller
from safespace.store import StoreError

logger = logging.getLogger(__name__)


class LearnController(Controller):
    def list_articles(self) -> List[Dict]:
        """Built-in cards first, then articles written by professionals (newest first)."""
        articles = [dict(card, id=f"card-{i}", author_id=None) for i, card in enumerate(LEARN_CARDS)]
        try:
            stored = self.store.table("learning_articles").select(order_by="created_at", descending=True)
        except StoreError as e:
            logger.error("Error loading articles: %s", e)
            return articles

        for row in stored:
            articles.append({
                "id": row.id,
                "title": row.title,
                "emoji": row.emoji,
                "content": row.content,
                "author_id": row.author_id,
            })
        return articles
