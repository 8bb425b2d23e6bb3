import sys
import pathlib
import asyncio

import pytest

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from contentgen.schemas import CONTENT_TYPES, LENGTHS, GenerateRequest
from contentgen.services.fallback import generate_fallback_content
from contentgen.services.generation import FallbackGenerator, LiveGenerator, build_messages


MIDDLE_MARKERS = {
    "blog": "## Why",
    "social": "Key Takeaways",
    "email": "**Phase 1**",
    "product": "### Why Choose",
}


def test_output_is_deterministic():
    first = generate_fallback_content("product", "smart kettles", "casual", "long")
    second = generate_fallback_content("product", "smart kettles", "casual", "long")
    assert first == second


@pytest.mark.parametrize("content_type", CONTENT_TYPES)
@pytest.mark.parametrize("length", LENGTHS)
def test_every_combination_is_non_empty_and_stripped(content_type, length):
    text = generate_fallback_content(content_type, "  solar panels  ", "friendly", length)
    assert text
    assert text == text.strip()
    assert "solar panels" in text
    assert "  solar panels" not in text


@pytest.mark.parametrize("content_type", CONTENT_TYPES)
def test_short_omits_middle_sections(content_type):
    marker = MIDDLE_MARKERS[content_type]
    assert marker not in generate_fallback_content(content_type, "solar panels", "friendly", "short")
    assert marker in generate_fallback_content(content_type, "solar panels", "friendly", "medium")
    assert marker in generate_fallback_content(content_type, "solar panels", "friendly", "long")


def test_long_adds_elaboration():
    medium = generate_fallback_content("blog", "solar panels", "friendly", "medium")
    long = generate_fallback_content("blog", "solar panels", "friendly", "long")
    assert len(long) > len(medium)


def test_headings_capitalize_prompt():
    text = generate_fallback_content("blog", "remote work", "professional", "short")
    assert text.startswith("# The Complete Guide to Remote work")


def test_tone_changes_wording_not_structure():
    plain = generate_fallback_content("social", "electric bikes", "professional", "medium")
    funny = generate_fallback_content("social", "electric bikes", "humorous", "medium")
    assert plain != funny
    assert plain.count("\n") == funny.count("\n")


def test_social_humorous_short_scenario():
    text = generate_fallback_content("social", "electric bikes", "humorous", "short")
    assert "I used to think electric bikes was a myth" in text
    assert "#electricbikes" in text
    assert "Key Takeaways" not in text


def test_email_professional_long_scenario():
    text = generate_fallback_content("email", "Q3 roadmap", "professional", "long")
    assert text.startswith("Subject:")
    assert "**Phase 1**" in text
    assert "**Phase 2**" in text
    assert "**Phase 3**" in text
    assert "call next Tuesday" in text
    assert "call next Tuesday" not in generate_fallback_content("email", "Q3 roadmap", "professional", "medium")


def test_unknown_content_type_falls_back_to_generic_sentence():
    assert generate_fallback_content("haiku", " tea ", "calm", "short") == "High-quality insights regarding tea."


def test_fallback_generator_streams_words_with_trailing_space():
    request = GenerateRequest(contentType="email", prompt="Q3 roadmap", tone="professional", length="medium")
    generator = FallbackGenerator(delay=0)

    async def _run():
        iterator = await generator.open(request)
        return [part async for part in iterator]

    parts = asyncio.run(_run())
    text = generate_fallback_content("email", "Q3 roadmap", "professional", "medium")
    assert "".join(parts) == text + " "
    assert len(parts) == len(text.split(" "))
    assert all(part.endswith(" ") and part for part in parts)


def test_fallback_generator_paces_between_words(monkeypatch):
    import contentgen.services.generation as gen

    sleeps = []

    async def _fake_sleep(delay):
        sleeps.append(delay)

    monkeypatch.setattr(gen.asyncio, "sleep", _fake_sleep)
    request = GenerateRequest(contentType="blog", prompt="tea", tone="calm", length="short")

    async def _run():
        iterator = await FallbackGenerator(delay=0.02).open(request)
        return [part async for part in iterator]

    parts = asyncio.run(_run())
    assert sleeps == [0.02] * (len(parts) - 1)


def test_build_messages_uses_content_type_template():
    request = GenerateRequest(contentType="product", prompt="smart kettles", tone="persuasive", length="short")
    messages = build_messages(request)
    assert messages[0] == {"role": "system", "content": "You are an expert content writer."}
    assert messages[1]["content"].startswith("Write a short persuasive product description for: smart kettles")


def test_build_messages_prefers_configured_prompts():
    request = GenerateRequest(contentType="blog", prompt="tea", tone="calm", length="long")
    prompts = {"system": {"content_writer": "Be brief."}, "user": {"blog": "{tone}|{length}|{prompt}"}}
    messages = build_messages(request, prompts)
    assert messages == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "calm|long|tea"},
    ]


def test_live_generator_closes_upstream_stream():
    import types

    class _Stream:
        def __init__(self):
            self.closed = False

        def __aiter__(self):
            return self._gen()

        async def _gen(self):
            yield types.SimpleNamespace(choices=[])
            yield types.SimpleNamespace(choices=[types.SimpleNamespace(delta=types.SimpleNamespace(content="hi"))])

        async def close(self):
            self.closed = True

    stream = _Stream()

    class _Completions:
        async def create(self, **kwargs):
            return stream

    client = types.SimpleNamespace(chat=types.SimpleNamespace(completions=_Completions()))
    settings = types.SimpleNamespace(openai_model="gpt-3.5-turbo", prompts={})
    request = GenerateRequest(contentType="blog", prompt="tea", tone="calm", length="short")

    async def _run():
        iterator = await LiveGenerator(settings, client=client).open(request)
        return [part async for part in iterator]

    assert asyncio.run(_run()) == ["hi"]
    assert stream.closed
