"""Link service models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UrlCandidate:
    """An outbound link discovered in analyzed content, pending verification."""

    url: str
    name: str = ""
    snippet: str = ""


@dataclass
class VerificationResult:
    """Liveness/relevance verdict for one candidate."""

    url: str
    original_url: str
    is_valid: bool
    final_url: str
    status: int
    reason: str | None = None

    @classmethod
    def pending(cls, url: str) -> "VerificationResult":
        """Initial state before any response: invalid, status 0, final URL unchanged."""
        return cls(url=url, original_url=url, is_valid=False, final_url=url, status=0)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase, ``reason`` omitted when unset)."""
        data: dict[str, Any] = {
            "url": self.url,
            "originalUrl": self.original_url,
            "isValid": self.is_valid,
            "finalUrl": self.final_url,
            "status": self.status,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass
class LinkRisk:
    """Heuristic risk assessment of one outbound link."""

    url: str
    domain: str
    label: str
    reasons: list[str] = field(default_factory=list)
    risk_score: int = 0


@dataclass
class OutboundLinksReport:
    """Result of an outbound link risk check for one page."""

    success: bool
    links: list[LinkRisk] = field(default_factory=list)
    total_found: int = 0
    analyzed: int = 0
    pro_available: bool = False
    pro_message: str | None = None
    error: str | None = None
