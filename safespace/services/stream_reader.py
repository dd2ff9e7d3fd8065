# safespace/services/stream_reader.py
"""Read the relay's event stream and pull out the assistant text fragments."""
import codecs
import json
import logging
from typing import AsyncIterable, AsyncIterator, Optional

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_LINE = "data: [DONE]"


def extract_delta(line: str) -> Optional[str]:
    """Return ``choices[0].delta.content`` of one ``data:`` line, or None."""
    line = line.rstrip("\r")
    if not line.startswith(DATA_PREFIX) or line == DONE_LINE:
        return None

    try:
        data = json.loads(line[len(DATA_PREFIX):])
        content = data["choices"][0]["delta"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        # Malformed fragments are dropped on purpose
        logger.debug("skipping unparsable stream line: %r", line[:80])
        return None

    if isinstance(content, str) and content:
        return content
    return None


async def iter_sse_deltas(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield text fragments in arrival order.

    Chunks can split a line, or a multi-byte character, anywhere; the partial
    tail is kept until the next chunk arrives.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""

    async for chunk in chunks:
        pending += decoder.decode(chunk)
        *lines, pending = pending.split("\n")
        for line in lines:
            fragment = extract_delta(line)
            if fragment is not None:
                yield fragment

    pending += decoder.decode(b"", final=True)
    if pending:
        fragment = extract_delta(pending)
        if fragment is not None:
            yield fragment


async def collect_text(chunks: AsyncIterable[bytes]) -> str:
    parts = []
    async for fragment in iter_sse_deltas(chunks):
        parts.append(fragment)
    return "".join(parts)
