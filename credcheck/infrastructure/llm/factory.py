"""Chat client factory helpers."""

import logging

from openai import AsyncOpenAI

from credcheck.config.settings import Settings

logger = logging.getLogger(__name__)

_shared_client: AsyncOpenAI | None = None


class TranslationConfigError(RuntimeError):
    """Raised when the translation gateway is not configured."""


def get_shared_client(settings: Settings) -> AsyncOpenAI:
    """
    Get or create a shared AsyncOpenAI client.

    The client talks to any OpenAI-compatible chat completions gateway.
    Its built-in retries are disabled: callers wrap requests in
    ``run_with_retry`` so the attempt budget is counted in one place.

    Raises:
        TranslationConfigError: If no API key is configured
    """
    global _shared_client
    if not settings.translation_api_key:
        raise TranslationConfigError("translation_api_key is not configured")
    if _shared_client is None:
        logger.debug(
            "Creating chat client (base_url=%s)", settings.translation_base_url or "default"
        )
        _shared_client = AsyncOpenAI(
            api_key=settings.translation_api_key,
            base_url=settings.translation_base_url,
            timeout=settings.translation_timeout,
            max_retries=0,
        )
    return _shared_client


async def close_shared_client() -> None:
    """
    Close the shared client instance.

    Should be called during application shutdown to release pooled connections.
    """
    global _shared_client
    if _shared_client is not None:
        await _shared_client.close()
        _shared_client = None
