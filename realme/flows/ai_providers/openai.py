from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from realme.core.config import OPENAI_API_KEY, OPENAI_CHAT_MODEL, OPENAI_MAX_TOKENS
from realme.core.exceptions import GenerationError
from realme.flows.ai_providers.base import StructuredGenerator
import realme.flows.prompts.templates as prompts

logger = logging.getLogger(__name__)


def _try_repair_parse(raw: Optional[str]) -> Any:
    """Parse JSON from model content, tolerating code fences and surrounding prose."""
    if not raw:
        raise ValueError("Empty content")
    s = raw.strip()
    if s.startswith("```"):
        s = s.strip("`\n ")
        if s.startswith("json"):
            s = s[4:]
    try:
        return json.loads(s)
    except json.JSONDecodeError:
        start = s.find("{")
        end = s.rfind("}")
        if start != -1 and end != -1 and end > start:
            return json.loads(s[start : end + 1])
        raise


class OpenAIStructuredGenerator(StructuredGenerator):
    """Structured generation over OpenAI chat completions with a json_schema response format."""

    model_tag = "chatgpt"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = OPENAI_MAX_TOKENS,
        client: Optional[AsyncOpenAI] = None,
    ):
        api_key = api_key or OPENAI_API_KEY
        if client is None and api_key:
            # Retries are owned by the flow policy, not the SDK
            client = AsyncOpenAI(api_key=api_key, max_retries=0)
        if client is None:
            logger.warning("OPENAI_API_KEY is not set; AI flows will fail until it is configured")
        self.client = client
        self.model = model or OPENAI_CHAT_MODEL
        self.max_tokens = max_tokens

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Dict[str, Any]:
        if self.client is None:
            raise GenerationError("Missing OPENAI_API_KEY in environment")
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompts.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": 0.7,
            "response_format": {"type": "json_schema", "json_schema": schema},
        }
        try:
            resp = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e

        if not resp.choices:
            raise GenerationError("OpenAI returned no choices")
        content = resp.choices[0].message.content
        try:
            parsed = _try_repair_parse(content)
        except (ValueError, json.JSONDecodeError) as e:
            logger.warning(f"OpenAI structured output parse failed for {schema.get('name')}: {e}")
            raise GenerationError(f"Failed to parse JSON from Chat Completions: {e}") from e

        if not isinstance(parsed, dict):
            raise GenerationError(f"Expected a JSON object, got {type(parsed).__name__}")
        return parsed
