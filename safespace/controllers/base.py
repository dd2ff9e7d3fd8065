# safespace/controllers/base.py
import logging
from typing import Optional

from safespace.controllers.notify import Notifier
from safespace.controllers.session import SessionContext
from safespace.store import TableStore

logger = logging.getLogger(__name__)

SIGN_IN_REQUIRED = "Sign in required"


def is_verified_professional(store: TableStore, user_id: Optional[str]) -> bool:
    if not user_id:
        return False
    return store.table("professionals").first(user_id=user_id, status="verified") is not None


class Controller:
    """Shared wiring for page controllers."""

    def __init__(self, session: SessionContext, store: TableStore, notifier: Notifier):
        self.session = session
        self.store = store
        self.notifier = notifier

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id

    def require_user(self, description: Optional[str] = None, title: str = SIGN_IN_REQUIRED) -> Optional[str]:
        """Return the signed-in user id, or notify and return None."""
        if not self.session.is_authenticated:
            self.notifier.error(title, description)
            return None
        return self.session.user_id
