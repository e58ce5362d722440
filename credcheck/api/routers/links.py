"""Outbound link endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from credcheck.api.dependencies import get_link_verifier, get_outbound_checker
from credcheck.api.models import (
    OutboundLinksRequest,
    OutboundLinksResponse,
    VerifyUrlsRequest,
    VerifyUrlsResponse,
)
from credcheck.services.links import (
    InvalidTargetError,
    LinkVerifier,
    OutboundLinkChecker,
    UrlCandidate,
)
from credcheck.services.links.outbound import messages

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/verify-urls",
    response_model=VerifyUrlsResponse,
    response_model_exclude_none=True,
)
async def verify_urls(
    request: VerifyUrlsRequest,
    verifier: LinkVerifier = Depends(get_link_verifier),  # noqa: B008
) -> VerifyUrlsResponse:
    """
    Check that candidate links are alive and lead to relevant pages.

    Results come back in input order, truncated to the first 20 candidates.
    Dead, blocked, generic and duplicate links are returned with
    ``isValid=false`` and a reason instead of failing the request.
    """
    candidates = [
        UrlCandidate(url=item.url, name=item.name or "", snippet=item.snippet or "")
        for item in request.urls
    ]
    try:
        results = await verifier.verify_batch(candidates)
    except Exception as e:
        logger.error("Error in verify-urls: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return VerifyUrlsResponse.model_validate({"results": [r.to_dict() for r in results]})


@router.post(
    "/check-outbound-links",
    response_model=OutboundLinksResponse,
    response_model_exclude_none=True,
)
async def check_outbound_links(
    request: OutboundLinksRequest,
    checker: OutboundLinkChecker = Depends(get_outbound_checker),  # noqa: B008
) -> OutboundLinksResponse | JSONResponse:
    """
    Fetch a page and rate the risk of its external links.

    A suspicious label does not mean fraud, only that higher-risk URL
    patterns were found.
    """
    try:
        report = await checker.check(request.url, request.language, request.analysis_type)
    except InvalidTargetError as e:
        logger.info("Rejected outbound link check for %s: %s", request.url, e)
        body = OutboundLinksResponse(success=False, error=messages(request.language)["invalid_url"])
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True, exclude_none=True))
    except Exception as e:
        logger.error("Error checking outbound links: %s", e, exc_info=True)
        body = OutboundLinksResponse(success=False, error="Internal error")
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True, exclude_none=True))

    return OutboundLinksResponse(
        success=report.success,
        links=[
            {
                "url": link.url,
                "domain": link.domain,
                "label": link.label,
                "reasons": link.reasons,
                "risk_score": link.risk_score,
            }
            for link in report.links
        ],
        total_found=report.total_found,
        analyzed=report.analyzed,
        pro_available=report.pro_available,
        pro_message=report.pro_message,
        error=report.error,
    )
