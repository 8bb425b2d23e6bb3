import asyncio
import inspect
import logging
from typing import AsyncIterator, List, Optional

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings, DEFAULT_SYSTEM_PROMPT, DEFAULT_USER_PROMPTS
from ..errors import UpstreamError
from ..schemas import GenerateRequest
from ..utils import async_sleep_yield, word_chunks
from .fallback import generate_fallback_content

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS_BY_LENGTH = {"long": 1000, "medium": 500, "short": 250}


def max_tokens_for(length: str) -> int:
    return MAX_TOKENS_BY_LENGTH.get(length, MAX_TOKENS_BY_LENGTH["short"])


def build_messages(data: GenerateRequest, prompts: Optional[dict] = None) -> List[dict]:
    prompts = prompts or {}
    sys_prompt = prompts.get("system", {}).get("content_writer") or DEFAULT_SYSTEM_PROMPT
    template = (
        prompts.get("user", {}).get(data.content_type)
        or DEFAULT_USER_PROMPTS[data.content_type]
    )
    user_prompt = template.format(length=data.length, tone=data.tone, prompt=data.prompt)
    return [
        {"role": "system", "content": sys_prompt},
        {"role": "user", "content": user_prompt},
    ]


class ContentGenerator:
    """Source of text deltas for one generation request.

    ``open`` does all setup work and returns the delta iterator, so any
    failure it raises happens before the response has started.
    """

    mode = "unknown"

    async def open(self, data: GenerateRequest) -> AsyncIterator[str]:
        raise NotImplementedError


class LiveGenerator(ContentGenerator):
    mode = "live"

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.client = client or AsyncOpenAI(api_key=settings.openai_api_key)

    async def open(self, data: GenerateRequest) -> AsyncIterator[str]:
        try:
            result = self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=build_messages(data, self.settings.prompts),
                temperature=TEMPERATURE,
                max_tokens=max_tokens_for(data.length),
                stream=True,
            )
            stream = await result if inspect.isawaitable(result) else result
        except OpenAIError as exc:
            raise UpstreamError(f"Upstream completion request failed: {exc}") from exc
        return self._deltas(stream)

    async def _deltas(self, stream) -> AsyncIterator[str]:
        try:
            async for chunk in stream:  # type: ignore
                try:
                    delta = chunk.choices[0].delta.content or ""
                except (AttributeError, IndexError):
                    delta = ""
                if delta:
                    yield delta
                    await async_sleep_yield()
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                closed = close()
                if inspect.isawaitable(closed):
                    await closed


class FallbackGenerator(ContentGenerator):
    mode = "fallback"

    def __init__(self, delay: float = 0.02):
        self.delay = delay

    async def open(self, data: GenerateRequest) -> AsyncIterator[str]:
        text = generate_fallback_content(data.content_type, data.prompt, data.tone, data.length)
        return self._words(text)

    async def _words(self, text: str) -> AsyncIterator[str]:
        first = True
        for word in word_chunks(text):
            if not first and self.delay > 0:
                await asyncio.sleep(self.delay)
            first = False
            yield word


def select_generator(settings: Settings) -> ContentGenerator:
    if settings.live_mode:
        logger.info("OPENAI_API_KEY configured; using live generation with %s", settings.openai_model)
        return LiveGenerator(settings)
    logger.info("OPENAI_API_KEY not set; using template fallback generation")
    return FallbackGenerator(delay=settings.fallback_chunk_delay)
