"""Source trust tiers and verification coverage."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from credcheck.config.constants import Stance, TrustTier
from credcheck.config.settings import Settings

_HIGH_TRUST_RE = re.compile(
    r"\.(gov|gouv|edu|int)\b|wikipedia|britannica|reuters|associated\s*press|\bafp\b|bbc|cnn"
    r"|new\s*york\s*times|nytimes|washington\s*post|wall\s*street|nature\.com|science\.org"
    r"|pubmed|who\.int|un\.org|nasa|\bnih\b|\bcdc\b|\bfda\b",
    re.IGNORECASE,
)


@dataclass
class CoverageReport:
    """Three coarse indicators of how well a claim was checked on the web."""

    web_coverage: str
    source_diversity: str
    contradiction_check: str
    total_sources: int
    unique_domains: int


def domain_of(url: str) -> str:
    """Hostname without a leading ``www.``; the input itself when it does not parse."""
    try:
        host = urlsplit(url).hostname
    except ValueError:
        return url
    if not host:
        return url
    return host[4:] if host.startswith("www.") else host


def infer_trust_tier(name: str | None, url: str | None) -> TrustTier:
    """
    Trust tier from a source's name and URL.

    Unknown domains default to medium: an unrecognized publisher is not
    evidence of low quality.
    """
    combined = f"{name or ''} {url or ''}"
    if _HIGH_TRUST_RE.search(combined):
        return TrustTier.HIGH
    return TrustTier.MEDIUM


def _web_coverage(total: int, settings: Settings) -> str:
    if total >= settings.coverage_extensive_min:
        return "extensive"
    if total >= settings.coverage_moderate_min:
        return "moderate"
    return "limited"


def _source_diversity(unique_domains: int, settings: Settings) -> str:
    if unique_domains >= settings.diversity_high_min:
        return "high"
    if unique_domains >= settings.diversity_medium_min:
        return "medium"
    return "low"


def _contradiction_check(stances: Iterable[str | None]) -> str:
    stance_list = list(stances)
    if any(s == Stance.CONTRADICTING.value for s in stance_list):
        return "clear"
    if sum(1 for s in stance_list if s == Stance.NEUTRAL.value) > 1:
        return "mixed"
    return "none"


def assess_coverage(
    sources: Sequence[dict[str, Any]],
    settings: Settings,
    sources_consulted: int = 0,
) -> CoverageReport:
    """
    Summarize coverage, diversity and contradiction signals for a source list.

    Args:
        sources: Items with optional ``url``, ``stance`` and ``trustTier`` keys
        settings: Thresholds for the coverage and diversity tiers
        sources_consulted: Upstream count of consulted sources, if larger

    Returns:
        CoverageReport
    """
    total = max(len(sources), sources_consulted)
    domains = {domain_of(s["url"]) for s in sources if s.get("url")}
    return CoverageReport(
        web_coverage=_web_coverage(total, settings),
        source_diversity=_source_diversity(len(domains), settings),
        contradiction_check=_contradiction_check(s.get("stance") for s in sources),
        total_sources=total,
        unique_domains=len(domains),
    )
