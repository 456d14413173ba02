"""Tests for the OpenAI structured generator with a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from realme.core.exceptions import GenerationError
from realme.flows.ai_providers.openai import OpenAIStructuredGenerator, _try_repair_parse

SCHEMA = {"name": "worry_jar", "schema": {"type": "object"}}


def _client(content=None, *, choices=True, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
        return client
    resp = MagicMock()
    resp.choices = [MagicMock(message=MagicMock(content=content))] if choices else []
    client.chat.completions.create = AsyncMock(return_value=resp)
    return client


class TestRepairParse:

    def test_plain_json(self):
        assert _try_repair_parse('{"a": 1}') == {"a": 1}

    def test_code_fence(self):
        assert _try_repair_parse('```json\n{"a": 1}\n```') == {"a": 1}

    def test_surrounding_prose(self):
        assert _try_repair_parse('Sure! Here it is: {"a": {"b": 2}} Hope this helps.') == {"a": {"b": 2}}

    def test_empty_content(self):
        with pytest.raises(ValueError):
            _try_repair_parse("")


class TestOpenAIStructuredGenerator:

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_at_generation(self, monkeypatch):
        monkeypatch.setattr("realme.flows.ai_providers.openai.OPENAI_API_KEY", None)
        generator = OpenAIStructuredGenerator()
        assert generator.client is None
        with pytest.raises(GenerationError, match="OPENAI_API_KEY"):
            await generator.generate("p", SCHEMA)

    @pytest.mark.asyncio
    async def test_sends_prompt_and_schema(self):
        client = _client('{"reframedThought": "You can take one step."}')
        generator = OpenAIStructuredGenerator(client=client, model="test-model")

        result = await generator.generate("Reframe this", SCHEMA)

        assert result == {"reframedThought": "You can take one step."}
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"][-1] == {"role": "user", "content": "Reframe this"}
        assert kwargs["response_format"] == {"type": "json_schema", "json_schema": SCHEMA}

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_generation_error(self):
        generator = OpenAIStructuredGenerator(client=_client(error=OpenAIError("down")))
        with pytest.raises(GenerationError, match="down"):
            await generator.generate("p", SCHEMA)

    @pytest.mark.asyncio
    async def test_no_choices(self):
        generator = OpenAIStructuredGenerator(client=_client(choices=False))
        with pytest.raises(GenerationError, match="no choices"):
            await generator.generate("p", SCHEMA)

    @pytest.mark.asyncio
    async def test_unparseable_content(self):
        generator = OpenAIStructuredGenerator(client=_client("I cannot help with that."))
        with pytest.raises(GenerationError):
            await generator.generate("p", SCHEMA)

    @pytest.mark.asyncio
    async def test_non_object_json(self):
        generator = OpenAIStructuredGenerator(client=_client("[1, 2, 3]"))
        with pytest.raises(GenerationError, match="JSON object"):
            await generator.generate("p", SCHEMA)
