# safespace/controllers/session.py
import logging
from dataclasses import dataclass
from typing import Optional

from safespace.core.security import decode_access_token

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """Who is using the app right now.

    Acquired from the auth service's token when the app starts and passed to
    every controller explicitly. After ``invalidate()`` (sign-out) it behaves
    exactly like an anonymous session.
    """

    user_id: Optional[str] = None
    access_token: Optional[str] = None

    @classmethod
    def acquire(cls, token: str) -> "SessionContext":
        user_id = decode_access_token(token)
        logger.info("session acquired for user %s", user_id)
        return cls(user_id=user_id, access_token=token)

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def invalidate(self) -> None:
        if self.user_id:
            logger.info("session invalidated for user %s", self.user_id)
        self.user_id = None
        self.access_token = None
