import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import httpx

from ..errors import InvalidTransition
from ..schemas import GenerateRequest
from .history import HistoryStore

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Something went wrong. Please try again."


class GenerationState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


_ALLOWED = {
    GenerationState.IDLE: {GenerationState.REQUESTING},
    GenerationState.REQUESTING: {GenerationState.STREAMING, GenerationState.FAILED},
    GenerationState.STREAMING: {GenerationState.COMPLETED, GenerationState.FAILED},
    GenerationState.COMPLETED: {GenerationState.REQUESTING},
    GenerationState.FAILED: {GenerationState.REQUESTING},
}


@dataclass
class GenerationSession:
    """What the client currently shows for its one generation slot."""

    state: GenerationState = GenerationState.IDLE
    text: str = ""
    error: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.state in (GenerationState.REQUESTING, GenerationState.STREAMING)

    def transition(self, target: GenerationState) -> None:
        if target not in _ALLOWED[self.state]:
            raise InvalidTransition(f"cannot go from {self.state.value} to {target.value}")
        if target is GenerationState.REQUESTING:
            self.text = ""
            self.error = None
        elif target is GenerationState.FAILED:
            # partial text stays visible
            self.error = FAILURE_MESSAGE
        self.state = target


class StreamConsumer:
    """Posts generation requests and reads the streamed body incrementally.

    ``on_update`` receives the whole accumulated text after every chunk;
    a renderer may skip intermediate values but the accumulator never
    drops a chunk. Only a fully read stream is committed to history.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        history: HistoryStore,
        on_update: Optional[Callable[[str], None]] = None,
        endpoint: str = "/api/generate",
    ):
        self.client = client
        self.history = history
        self.on_update = on_update
        self.endpoint = endpoint
        self.session = GenerationSession()

    async def generate(self, request: Union[GenerateRequest, dict]) -> GenerationSession:
        if isinstance(request, GenerateRequest):
            payload = request.model_dump(by_alias=True)
        else:
            payload = dict(request)

        session = self.session
        session.transition(GenerationState.REQUESTING)
        try:
            async with self.client.stream("POST", self.endpoint, json=payload) as response:
                if response.status_code != 200:
                    await response.aread()
                    logger.warning(
                        "Generation request rejected with %s: %s", response.status_code, response.text
                    )
                    session.transition(GenerationState.FAILED)
                    return session
                session.transition(GenerationState.STREAMING)
                async for chunk in response.aiter_text():
                    if not chunk:
                        continue
                    session.text += chunk
                    self._publish(session.text)
        except Exception as exc:
            logger.warning("Generation stream failed: %s", exc)
            session.transition(GenerationState.FAILED)
            return session

        session.transition(GenerationState.COMPLETED)
        self.history.record(
            text=session.text,
            content_type=payload.get("contentType", ""),
            prompt=payload.get("prompt", ""),
        )
        return session

    def _publish(self, text: str) -> None:
        if self.on_update is not None:
            self.on_update(text)
