# safespace/controllers/layout.py
import logging
from typing import Dict, List

from safespace.controllers.base import is_verified_professional
from safespace.controllers.session import SessionContext
from safespace.store import StoreError, TableStore

logger = logging.getLogger(__name__)

NAV_ITEMS: List[Dict[str, str]] = [
    {"path": "/", "label": "Home"},
    {"path": "/reflect", "label": "Reflect"},
    {"path": "/connect", "label": "Connect"},
    {"path": "/wellness", "label": "Wellness"},
    {"path": "/learn", "label": "Learn"},
    {"path": "/stories", "label": "Stories"},
    {"path": "/chat", "label": "Chat"},
]
DASHBOARD_ITEM = {"path": "/therapist-dashboard", "label": "Dashboard"}


def nav_for(session: SessionContext, store: TableStore) -> List[Dict[str, str]]:
    items = list(NAV_ITEMS)
    if not session.is_authenticated:
        return items
    try:
        if is_verified_professional(store, session.user_id):
            items.append(DASHBOARD_ITEM)
    except StoreError as e:
        logger.warning("Could not check professional status: %s", e)
    return items


def sign_out(session: SessionContext) -> None:
    session.invalidate()
