"""Tests for the analysis translation service."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import httpx
import openai
import pytest

from credcheck.config.prompts import (
    build_translation_system_prompt,
    build_translation_user_input,
    resolve_language_name,
)
from credcheck.config.settings import Settings
from credcheck.infrastructure.llm.factory import TranslationConfigError
from credcheck.services.translation import TranslationService


def _reply(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(create: AsyncMock):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


# ==========================================
#  PROMPTS
# ==========================================


def test_resolve_language_name():
    """Test language codes map to display names with an English default."""
    assert resolve_language_name("fr") == "FRENCH"
    assert resolve_language_name("ja") == "JAPANESE"
    assert resolve_language_name("xx") == "ENGLISH"
    assert resolve_language_name(None) == "ENGLISH"


def test_system_prompt_names_language_and_protected_fields():
    """Test the system prompt names the language and the protected fields."""
    prompt = build_translation_system_prompt("fr")
    assert "FRENCH" in prompt
    assert "whyItMatters" in prompt
    assert "DO NOT" in prompt


def test_user_input_embeds_document(analysis):
    """Test the user message carries the document as JSON."""
    text = build_translation_user_input(analysis, "fr")
    assert text.startswith("Translate this analysis JSON to French:")
    assert '"score": 72' in text


# ==========================================
#  TRANSLATE
# ==========================================


@pytest.mark.asyncio
async def test_translate_merges_model_reply(settings, analysis):
    """Test a valid reply is merged and the call uses the configured model."""
    translated = json.loads(json.dumps(analysis))
    translated["summary"] = "Résumé traduit."
    translated["score"] = 1
    create = AsyncMock(return_value=_reply(json.dumps(translated)))
    service = TranslationService(settings, client=_client(create))

    result = await service.translate(analysis, "fr")

    assert result["summary"] == "Résumé traduit."
    assert result["score"] == 72
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == settings.translation_model
    assert kwargs["temperature"] == settings.translation_temperature
    assert kwargs["messages"][0]["role"] == "system"
    assert "FRENCH" in kwargs["messages"][0]["content"]


@pytest.mark.asyncio
async def test_translate_accepts_fenced_reply(settings, analysis):
    """Test a reply wrapped in a code fence is parsed."""
    reply = '```json\n{"summary": "Résumé."}\n```'
    service = TranslationService(settings, client=_client(AsyncMock(return_value=_reply(reply))))
    result = await service.translate(analysis, "fr")
    assert result["summary"] == "Résumé."


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["Désolé, je ne peux pas.", "", None, "[1, 2]"])
async def test_translate_unparseable_reply_returns_original(settings, analysis, content):
    """Test replies without a JSON object return the original."""
    service = TranslationService(settings, client=_client(AsyncMock(return_value=_reply(content))))
    result = await service.translate(analysis, "fr")
    assert result == analysis


@pytest.mark.asyncio
async def test_translate_no_choices_returns_original(settings, analysis):
    """Test a reply without choices returns the original."""
    reply = SimpleNamespace(choices=[])
    service = TranslationService(settings, client=_client(AsyncMock(return_value=reply)))
    assert await service.translate(analysis, "fr") == analysis


@pytest.mark.asyncio
@patch("credcheck.utils.retry.asyncio.sleep", new_callable=AsyncMock)
async def test_translate_api_error_returns_original_after_retries(mock_sleep, settings, analysis):
    """Test API errors are retried, then the original is returned."""
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://gateway.example/v1"))
    create = AsyncMock(side_effect=error)
    service = TranslationService(settings, client=_client(create))

    result = await service.translate(analysis, "fr")

    assert result == analysis
    assert create.await_count == settings.translation_max_retries


@pytest.mark.asyncio
async def test_translate_without_api_key_raises(analysis):
    """Test a missing API key is a configuration error."""
    settings = Settings(_env_file=None, translation_api_key=None)
    service = TranslationService(settings)
    with pytest.raises(TranslationConfigError):
        await service.translate(analysis, "fr")
