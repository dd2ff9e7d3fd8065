# safespace/schemas/relay.py
from typing import Any, List

from pydantic import BaseModel

from safespace.schemas.chat import ChatTurn


class RelayRequest(BaseModel):
    messages: List[ChatTurn]
    # "reflect" | "chat" | anything else (falls back to the default prompt)
    type: Any = None


class RelayErrorBody(BaseModel):
    error: str
