"""Source coverage endpoint."""

from fastapi import APIRouter, Depends

from credcheck.api.dependencies import get_settings_dependency
from credcheck.api.models import SourceCoverageRequest, SourceCoverageResponse
from credcheck.config.settings import Settings
from credcheck.services.sources import assess_coverage, infer_trust_tier

router = APIRouter()


@router.post(
    "/source-coverage",
    response_model=SourceCoverageResponse,
    response_model_exclude_none=True,
)
async def source_coverage(
    request: SourceCoverageRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> SourceCoverageResponse:
    """Coverage, diversity and contradiction indicators for a source list."""
    sources = [
        source
        if source.trust_tier
        else source.model_copy(update={"trust_tier": infer_trust_tier(source.title, source.url).value})
        for source in request.sources
    ]
    report = assess_coverage(
        [source.model_dump() for source in sources],
        settings,
        sources_consulted=request.sources_consulted,
    )
    return SourceCoverageResponse(
        web_coverage=report.web_coverage,
        source_diversity=report.source_diversity,
        contradiction_check=report.contradiction_check,
        total_sources=report.total_sources,
        unique_domains=report.unique_domains,
        sources=sources,
    )
