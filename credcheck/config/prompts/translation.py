"""
Translation agent system prompts.
"""

import json
from typing import Any

from credcheck.config.constants import DEFAULT_LANGUAGE_NAME, LANGUAGE_NAMES


def resolve_language_name(target_language: str | None) -> str:
    """Return the upper-case display name for a language code (ENGLISH when unknown)."""
    if not target_language:
        return DEFAULT_LANGUAGE_NAME
    return LANGUAGE_NAMES.get(target_language.strip().lower(), DEFAULT_LANGUAGE_NAME)


def build_translation_system_prompt(target_language: str | None) -> str:
    """Build system prompt for the analysis translation agent."""
    language_name = resolve_language_name(target_language)

    prompt = (
        "You are a professional translator. Your task is to translate analysis JSON text "
        "while preserving the exact meaning.\n"
        "\n"
        "CRITICAL RULES:\n"
        "1. Translate ONLY human-readable text fields - NEVER change any numerical values\n"
        "2. Keep the same JSON structure exactly (keys, arrays, nesting)\n"
        f"3. Translate to {language_name}\n"
        "4. Maintain the same professional, analytical tone\n"
        "5. Keep technical terms accurate\n"
        "6. DO NOT translate proper names of sources (media names, institutions, websites)\n"
        "\n"
        "You will receive a JSON object with analysis results. Translate ONLY these text fields:\n"
        "- summary, articleSummary, disclaimer, proDisclaimer (if present)\n"
        "- breakdown.*.reason (for both Standard and PRO breakdown keys)\n"
        "- webPresence.observation (if present)\n"
        "- corroboration.summary (if present)\n"
        "- imageSignals.disclaimer, imageSignals.coherence.explanation, "
        "imageSignals.scoring.reasoning (if present)\n"
        "- imageSignals.origin.indicators[] and imageSignals.scoring.severityConditionsMet[] "
        "(translate each string, keep the same number of items)\n"
        "- result.summary, result.bestLinks[].title, result.bestLinks[].whyItMatters, "
        "result.sources[].title, result.sources[].whyItMatters (if present)\n"
        "\n"
        "DO NOT modify:\n"
        "- score and any other number\n"
        "- breakdown.*.points (numbers) and breakdown.*.weight (strings like \"30%\")\n"
        "- confidence, riskLevel, analysisType, outcome, stance, trustTier, classification (enum values)\n"
        "- any url, publisher or domain\n"
        "- corroboration.sources (keep EXACTLY as-is)\n"
        "\n"
        "Respond with the complete JSON object with translated text fields."
    )

    return prompt


def build_translation_user_input(analysis_data: dict[str, Any], target_language: str | None) -> str:
    """Build the user message carrying the document to translate."""
    language_name = resolve_language_name(target_language).capitalize()
    document = json.dumps(analysis_data, indent=2, ensure_ascii=False)
    return f"Translate this analysis JSON to {language_name}:\n\n{document}"
