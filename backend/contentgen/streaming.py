import logging
from typing import AsyncGenerator, AsyncIterator

from fastapi.responses import StreamingResponse

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def text_stream_response(chunks: AsyncIterator[str]) -> StreamingResponse:
    """Deliver text chunks as a progressively written plain-text body.

    Chunks go out in the order they arrive and empty ones are dropped.
    A failure mid-stream is logged and re-raised so the server aborts the
    connection; whatever was already flushed stays with the client.
    """

    async def _body() -> AsyncGenerator[bytes, None]:
        try:
            async for part in chunks:
                if part:
                    yield part.encode("utf-8", errors="ignore")
        except Exception:
            logger.exception("Generation stream failed after streaming started")
            raise

    return StreamingResponse(
        _body(),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )
