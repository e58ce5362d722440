"""Analysis translation services."""

from credcheck.services.translation.merge import merge_translated_text
from credcheck.services.translation.service import TranslationService

__all__ = ["TranslationService", "merge_translated_text"]
