# safespace/relay/router.py
"""
Chat relay: the only server-side logic of the app.

Forwards a conversation to the upstream chat-completions gateway with
streaming enabled and hands the event stream back to the caller byte for
byte. Holds no state between calls and never retries.
"""
from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse

from safespace.core.config import settings
from safespace.relay.prompts import select_system_prompt
from safespace.schemas.relay import RelayErrorBody, RelayRequest

log = logging.getLogger(__name__)
router = APIRouter(tags=["relay"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

RATE_LIMIT_MESSAGE = "Rate limits exceeded, please try again later."
UNAVAILABLE_MESSAGE = "Service temporarily unavailable."
UPSTREAM_ERROR_MESSAGE = "AI service error"


class RelayConfigError(RuntimeError):
    pass


def get_upstream_client() -> httpx.AsyncClient:
    """One client per relay call; closed when the passthrough ends."""
    # No read timeout: the upstream may keep streaming as long as it likes
    timeout = httpx.Timeout(None, connect=settings.RELAY_CONNECT_TIMEOUT)
    return httpx.AsyncClient(timeout=timeout)


def _error(status_code: int, message: str) -> JSONResponse:
    body = RelayErrorBody(error=message)
    return JSONResponse(body.model_dump(), status_code=status_code, headers=CORS_HEADERS)


def build_upstream_payload(body: RelayRequest) -> Dict[str, Any]:
    system_prompt = select_system_prompt(body.type)
    return {
        "model": settings.AI_MODEL,
        "messages": [{"role": "system", "content": system_prompt}]
        + [turn.model_dump() for turn in body.messages],
        "stream": True,
    }


async def _passthrough(upstream: httpx.Response, client: httpx.AsyncClient) -> AsyncIterator[bytes]:
    # Closing here also runs when the caller disconnects mid-stream
    try:
        async for chunk in upstream.aiter_bytes():
            yield chunk
    finally:
        await upstream.aclose()
        await client.aclose()


@router.options("/chat")
async def chat_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/chat")
async def chat_relay(request: Request, client: httpx.AsyncClient = Depends(get_upstream_client)):
    try:
        body = RelayRequest.model_validate(await request.json())

        api_key = settings.AI_GATEWAY_API_KEY
        if not api_key:
            raise RelayConfigError("AI_GATEWAY_API_KEY is not configured")

        upstream_request = client.build_request(
            "POST",
            settings.AI_GATEWAY_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=build_upstream_payload(body),
        )
        upstream = await client.send(upstream_request, stream=True)
    except Exception as e:
        await client.aclose()
        log.error("chat error: %s", e, exc_info=True)
        return _error(500, str(e) or e.__class__.__name__)

    if upstream.status_code == 429 or upstream.status_code == 402:
        await upstream.aclose()
        await client.aclose()
        message = RATE_LIMIT_MESSAGE if upstream.status_code == 429 else UNAVAILABLE_MESSAGE
        log.warning("AI gateway answered %s", upstream.status_code)
        return _error(upstream.status_code, message)

    if not upstream.is_success:
        try:
            detail = (await upstream.aread()).decode("utf-8", errors="replace")
        finally:
            await upstream.aclose()
            await client.aclose()
        log.error("AI gateway error: %s %s", upstream.status_code, detail)
        return _error(500, UPSTREAM_ERROR_MESSAGE)

    log.info("relaying %s stream (%d turns)", body.type or "default", len(body.messages))
    return StreamingResponse(
        _passthrough(upstream, client),
        status_code=200,
        media_type="text/event-stream",
        headers=CORS_HEADERS,
    )
