"""Outbound link services."""

from credcheck.services.links.models import (
    LinkRisk,
    OutboundLinksReport,
    UrlCandidate,
    VerificationResult,
)
from credcheck.services.links.outbound import InvalidTargetError, OutboundLinkChecker
from credcheck.services.links.verifier import LinkVerifier, deduplicate_results

__all__ = [
    "InvalidTargetError",
    "LinkRisk",
    "LinkVerifier",
    "OutboundLinkChecker",
    "OutboundLinksReport",
    "UrlCandidate",
    "VerificationResult",
    "deduplicate_results",
]
