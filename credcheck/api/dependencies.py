"""FastAPI dependencies."""

from functools import lru_cache

from fastapi import Depends

from credcheck.config.settings import Settings, get_settings
from credcheck.services.links import LinkVerifier, OutboundLinkChecker
from credcheck.services.translation import TranslationService


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()


def get_link_verifier(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> LinkVerifier:
    """Link verifier for the current request."""
    return LinkVerifier(settings)


def get_outbound_checker(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> OutboundLinkChecker:
    """Outbound link checker for the current request."""
    return OutboundLinkChecker(settings)


def get_translation_service(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> TranslationService:
    """Translation service for the current request."""
    return TranslationService(settings)
