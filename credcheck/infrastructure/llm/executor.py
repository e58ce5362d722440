"""
Chat completion executor with retry.
"""
import logging
from typing import Any

from credcheck.utils.retry import run_with_retry

logger = logging.getLogger(__name__)


async def run_chat_completion(
    client: Any,
    model: str,
    system_prompt: str,
    user_message: str,
    *,
    temperature: float = 0.1,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
) -> str:
    """
    Run a single system+user chat completion and return the reply text.

    Includes automatic retry with exponential backoff for rate limit and
    transient connection errors. Returns an empty string when the model
    sends no content.
    """
    async def _execute() -> str:
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=temperature,
        )
        if not response.choices:
            return ""
        content = response.choices[0].message.content
        return content or ""

    text = await run_with_retry(
        _execute,
        max_retries=max_retries,
        initial_delay=initial_delay,
        backoff_factor=backoff_factor,
        retry_on_rate_limit=True,
    )
    logger.debug("run_chat_completion: model=%s, reply length=%d", model, len(text))
    return text
