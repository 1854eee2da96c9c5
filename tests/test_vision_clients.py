"""Tests for the vision provider adapters."""

import asyncio

from meal_scan.adapters.gemini_vision_client import GeminiVisionClient
from meal_scan.adapters.openai_vision_client import OpenAIVisionClient, strict_schema
from meal_scan.services.vision import VISION_SCHEMA


class _FakeResponses:
    def __init__(self) -> None:
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": '{"items": []}'})()


class _FakeOpenAI:
    def __init__(self) -> None:
        self.responses = _FakeResponses()
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class _FakeModels:
    def __init__(self) -> None:
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return type("Resp", (), {"text": '```json\n{"items": []}\n```'})()


class _FakeGenAI:
    def __init__(self) -> None:
        self.aio = type("Aio", (), {})()
        self.aio.models = _FakeModels()


def test_openai_vision_client_returns_output_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAIVisionClient(client=fake, reasoning_effort="high")

    text = asyncio.run(
        client.generate(
            model="gpt-5.2",
            prompt="Analyze",
            image_bytes=b"fake",
            mime_type="image/jpeg",
            schema=VISION_SCHEMA,
        )
    )

    payload = fake.responses.last_payload
    assert text == '{"items": []}'
    assert payload is not None
    assert payload["reasoning"] == {"effort": "high"}
    assert payload["store"] is False
    content = payload["input"][0]["content"]
    assert content[1]["image_url"] == "data:image/jpeg;base64,ZmFrZQ=="
    assert payload["text"]["format"]["strict"] is True


def test_openai_vision_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI()
    client = OpenAIVisionClient(client=fake)

    asyncio.run(
        client.generate(
            model="gpt-5.2",
            prompt="Analyze",
            image_bytes=b"fake",
            mime_type="image/jpeg",
            schema={"type": "object"},
        )
    )
    asyncio.run(client.close())

    assert "reasoning" not in fake.responses.last_payload
    assert fake.closed is True


def test_strict_schema_closes_every_object() -> None:
    schema = strict_schema(VISION_SCHEMA)
    item = schema["properties"]["items"]["items"]

    assert schema["additionalProperties"] is False
    assert item["additionalProperties"] is False
    assert item["properties"]["nutrients"]["additionalProperties"] is False
    assert "additionalProperties" not in item["properties"]["name"]
    assert "additionalProperties" not in VISION_SCHEMA


def test_gemini_vision_client_sends_image_and_schema() -> None:
    fake = _FakeGenAI()
    client = GeminiVisionClient(client=fake)

    text = asyncio.run(
        client.generate(
            model="gemini-3-pro-preview",
            prompt="Analyze",
            image_bytes=b"\xff\xd8\xff",
            mime_type="image/jpeg",
            schema=VISION_SCHEMA,
        )
    )

    kwargs = fake.aio.models.last_kwargs
    assert text == '```json\n{"items": []}\n```'
    assert kwargs is not None
    assert kwargs["model"] == "gemini-3-pro-preview"
    image_part, text_part = kwargs["contents"]
    assert image_part.inline_data.data == b"\xff\xd8\xff"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert text_part.text == "Analyze"
    assert kwargs["config"].response_mime_type == "application/json"
