from safespace.relay.prompts import (
    CHAT_PROMPT,
    DEFAULT_PROMPT,
    REFLECT_PROMPT,
    select_system_prompt,
)
from safespace.relay.router import (
    CORS_HEADERS,
    RATE_LIMIT_MESSAGE,
    UNAVAILABLE_MESSAGE,
    get_upstream_client,
    router,
)

__all__ = [
    "CHAT_PROMPT",
    "DEFAULT_PROMPT",
    "REFLECT_PROMPT",
    "select_system_prompt",
    "CORS_HEADERS",
    "RATE_LIMIT_MESSAGE",
    "UNAVAILABLE_MESSAGE",
    "get_upstream_client",
    "router",
]
