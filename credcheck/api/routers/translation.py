"""Analysis translation endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from credcheck.api.dependencies import get_translation_service
from credcheck.api.models import TranslateAnalysisRequest
from credcheck.services.translation import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate-analysis")
async def translate_analysis(
    request: TranslateAnalysisRequest,
    service: TranslationService = Depends(get_translation_service),  # noqa: B008
) -> dict[str, Any]:
    """
    Translate the human-readable text of an analysis document.

    Scores, enums, URLs and structure are copied from the input unchanged.
    When the model call fails or its output cannot be parsed, the input
    document is returned as-is.
    """
    try:
        return await service.translate(request.analysis_data, request.target_language)
    except Exception as e:
        logger.error("Translation error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e) or "Translation failed") from e
