"""Request/Response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==========================================
#  LINK VERIFICATION
# ==========================================


class UrlCandidateModel(CamelModel):
    """Outbound link found in analyzed content."""

    url: str = Field(..., description="Absolute URL to verify")
    name: str | None = Field(None, description="Source name shown to the user")
    snippet: str | None = Field(None, description="Text associated with the link")


class VerifyUrlsRequest(CamelModel):
    """Request model for the verify-urls endpoint."""

    urls: list[UrlCandidateModel] = Field(..., description="Candidates, only the first 20 are verified")


class VerificationResultModel(CamelModel):
    """Verdict for one candidate."""

    url: str
    original_url: str
    is_valid: bool
    final_url: str = Field(..., description="URL after redirects")
    status: int = Field(..., description="HTTP status, 0 when no response was received")
    reason: str | None = Field(None, description="Why the link was rejected")


class VerifyUrlsResponse(CamelModel):
    """Response model for the verify-urls endpoint."""

    results: list[VerificationResultModel]


# ==========================================
#  OUTBOUND LINK RISK
# ==========================================


class OutboundLinksRequest(CamelModel):
    """Request model for the outbound link risk check."""

    url: str = Field(..., min_length=1, description="Page whose outbound links are checked")
    language: str = Field("en", description="Language of the reasons (en or fr)")
    analysis_type: str = Field("standard", description="standard or pro")


class LinkRiskModel(CamelModel):
    """Risk assessment of one outbound link."""

    url: str
    domain: str
    label: str = Field(..., description="Safe, Unknown or Suspicious")
    reasons: list[str]
    risk_score: int = Field(..., ge=0, le=100)


class OutboundLinksResponse(CamelModel):
    """Response model for the outbound link risk check."""

    success: bool
    links: list[LinkRiskModel] = []
    total_found: int = 0
    analyzed: int = 0
    pro_available: bool = False
    pro_message: str | None = None
    error: str | None = None


# ==========================================
#  TRANSLATION
# ==========================================


class TranslateAnalysisRequest(CamelModel):
    """Request model for the translate-analysis endpoint."""

    analysis_data: dict[str, Any] = Field(..., description="Analysis document to translate")
    target_language: str | None = Field("en", description="Target language code")


# ==========================================
#  SOURCES
# ==========================================


class SourceItem(CamelModel):
    """A source consulted during corroboration."""

    url: str | None = None
    title: str | None = None
    publisher: str | None = None
    stance: str | None = Field(None, description="corroborating, contradicting or neutral")
    trust_tier: str | None = Field(None, description="high, medium or low")


class SourceCoverageRequest(CamelModel):
    """Request model for the source-coverage endpoint."""

    sources: list[SourceItem] = Field(default_factory=list)
    sources_consulted: int = Field(0, ge=0)


class SourceCoverageResponse(CamelModel):
    """Coverage indicators plus the sources with trust tiers filled in."""

    web_coverage: str
    source_diversity: str
    contradiction_check: str
    total_sources: int
    unique_domains: int
    sources: list[SourceItem]


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
