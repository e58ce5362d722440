"""LLM infrastructure module."""

from credcheck.infrastructure.llm.executor import run_chat_completion
from credcheck.infrastructure.llm.factory import (
    TranslationConfigError,
    close_shared_client,
    get_shared_client,
)

__all__ = [
    "run_chat_completion",
    "TranslationConfigError",
    "close_shared_client",
    "get_shared_client",
]
