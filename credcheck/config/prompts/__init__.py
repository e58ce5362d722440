"""System prompts for model-backed services."""

from credcheck.config.prompts.translation import (
    build_translation_system_prompt,
    build_translation_user_input,
    resolve_language_name,
)

__all__ = [
    "build_translation_system_prompt",
    "build_translation_user_input",
    "resolve_language_name",
]
