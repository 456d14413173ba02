"""
Abstract structured generation interface.

Flows only depend on this contract, so the provider behind them can be
swapped (OpenAI, a local model, a fake in tests) without touching prompts.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class StructuredGenerator(ABC):
    """Turns a prompt plus a JSON schema into a JSON object."""

    model_tag: str

    @abstractmethod
    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Dict[str, Any]:
        """
        Generate an object for the prompt, constrained by the schema.

        Args:
            prompt: The fully rendered prompt text
            schema: Named JSON schema, {"name": ..., "schema": {...}}

        Returns:
            The parsed JSON object. An empty object is a valid (if useless) result.

        Raises:
            GenerationError: If the provider fails or returns unparseable content
        """
        pass
