import asyncio
from typing import Iterator


async def async_sleep_yield():
    # Help cooperative multitasking in streaming loops
    await asyncio.sleep(0)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def word_chunks(text: str) -> Iterator[str]:
    """Yield each space-delimited word followed by a single space.

    Splitting on the space character only keeps newlines inside the chunks,
    so joining the output gives back ``text + " "``.
    """
    for word in text.split(" "):
        yield word + " "
