"""Analysis translation service."""

import logging
import time
from typing import Any

import openai

from credcheck.config.prompts import (
    build_translation_system_prompt,
    build_translation_user_input,
    resolve_language_name,
)
from credcheck.config.settings import Settings
from credcheck.infrastructure.llm.executor import run_chat_completion
from credcheck.infrastructure.llm.factory import get_shared_client
from credcheck.infrastructure.logging.logger import StructuredLogger
from credcheck.services.translation.merge import merge_translated_text
from credcheck.utils.json_parser import JSONParser

logger = logging.getLogger(__name__)


class TranslationService:
    """Translates the human-readable text of an analysis document."""

    def __init__(self, settings: Settings, client: Any | None = None):
        """
        Initialize translation service.

        Args:
            settings: Application settings
            client: Optional chat client; the shared gateway client is used otherwise
        """
        self.settings = settings
        self._client = client
        self._structured = StructuredLogger(__name__)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = get_shared_client(self.settings)
        return self._client

    async def translate(self, analysis_data: dict[str, Any], target_language: str | None) -> dict[str, Any]:
        """
        Translate ``analysis_data`` into ``target_language``.

        The model reply is parsed and merged field by field into a copy of the
        original. API errors (after retries), empty replies and unparseable
        replies all return ``analysis_data`` unchanged.

        Raises:
            TranslationConfigError: If no gateway API key is configured
        """
        client = self._get_client()
        language_name = resolve_language_name(target_language)
        logger.info("Translating analysis to: %s (%s)", target_language, language_name)

        start = time.perf_counter()
        try:
            reply = await run_chat_completion(
                client,
                self.settings.translation_model,
                build_translation_system_prompt(target_language),
                build_translation_user_input(analysis_data, target_language),
                temperature=self.settings.translation_temperature,
                max_retries=self.settings.translation_max_retries,
                initial_delay=self.settings.translation_retry_delay,
                backoff_factor=self.settings.retry_backoff_factor,
            )
        except (openai.OpenAIError, TimeoutError) as e:
            self._structured.log_error(
                "translate_analysis",
                e,
                {"target_language": target_language, "model": self.settings.translation_model},
            )
            self._log_outcome("api_error", target_language, start)
            return analysis_data

        translated = JSONParser.extract_object(reply)
        if translated is None:
            self._log_outcome("unparseable", target_language, start, reply_length=len(reply))
            return analysis_data

        merged = merge_translated_text(analysis_data, translated)
        self._log_outcome("merged", target_language, start)
        return merged

    def _log_outcome(self, outcome: str, target_language: str | None, start: float, **extra: Any) -> None:
        state: dict[str, Any] = {"outcome": outcome, "target_language": target_language, **extra}
        duration_ms = (time.perf_counter() - start) * 1000
        if outcome == "merged":
            self._structured.log_step("translate_analysis", state, duration_ms=duration_ms)
        else:
            logger.warning("Translation fell back to original document: %s", state)
