# safespace/services/relay_client.py
import json
import logging
from typing import AsyncIterator, Iterable, List, Optional

import httpx

from safespace.schemas.chat import ChatTurn
from safespace.services.stream_reader import iter_sse_deltas

logger = logging.getLogger(__name__)

RELAY_PATH = "/functions/v1/chat"


class RelayError(Exception):
    """The relay answered with a non-2xx status before streaming."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"relay returned {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class RelayUnavailable(Exception):
    """The relay could not be reached (or the connection dropped)."""


def _error_message(body: bytes) -> str:
    try:
        return json.loads(body).get("error") or ""
    except (ValueError, AttributeError):
        return body.decode("utf-8", errors="replace")


class RelayClient:
    """Calls the chat relay and yields the assistant's text as it streams in."""

    def __init__(self, http: httpx.AsyncClient, path: str = RELAY_PATH, api_key: Optional[str] = None):
        self._http = http
        self._path = path
        self._api_key = api_key

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def stream_reply(self, messages: Iterable[ChatTurn], mode: str) -> AsyncIterator[str]:
        payload = {
            "messages": [m.model_dump() for m in messages],
            "type": mode,
        }
        try:
            async with self._http.stream("POST", self._path, json=payload, headers=self._headers()) as response:
                if not response.is_success:
                    body = await response.aread()
                    raise RelayError(response.status_code, _error_message(body))

                async for fragment in iter_sse_deltas(response.aiter_bytes()):
                    yield fragment
        except httpx.TransportError as e:
            logger.error("relay unreachable: %s", e)
            raise RelayUnavailable(str(e)) from e

    async def complete(self, messages: Iterable[ChatTurn], mode: str) -> str:
        parts: List[str] = []
        async for fragment in self.stream_reply(messages, mode):
            parts.append(fragment)
        return "".join(parts)
