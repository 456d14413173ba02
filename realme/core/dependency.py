from functools import lru_cache
import logging

from realme.flows.ai_providers.base import StructuredGenerator
from realme.flows.ai_providers.openai import OpenAIStructuredGenerator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _chatgpt() -> StructuredGenerator:
    return OpenAIStructuredGenerator()


def get_generator() -> StructuredGenerator:
    """
    Returns the structured generation provider used by the flows.
    Also usable as a FastAPI dependency, overridable in tests.
    """
    return _chatgpt()
