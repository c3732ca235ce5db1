"""
Summarization route (token-gated).

Route prefix: /api/v1/summarize
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from api.errors import UpstreamError
from auth.dependencies import get_current_user_id, get_summarizer
from core.summarizer import SummarizationError, Summarizer
from utils.schemas import SummarizeRequest, SummaryResult
from utils.validators import validate_or_first_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summarize"])


@router.post("", response_model=SummaryResult)
async def summarize(
    payload: Dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    summarizer: Summarizer = Depends(get_summarizer),
) -> SummaryResult:
    req = validate_or_first_error(SummarizeRequest, payload)
    logger.info("Summarize request from user %s", user_id)
    try:
        return await summarizer.summarize(req.transcription)
    except SummarizationError as exc:
        # upstream detail is logged by the summarizer, never returned
        raise UpstreamError() from exc
