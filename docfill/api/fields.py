"""Stateless field API routes.

Exposes pattern detection, placeholder substitution and analysis reply
validation directly, without a document session.
"""

import structlog
from fastapi import APIRouter, HTTPException, status

from docfill.api.schemas import (
    DetectRequest,
    FieldListResponse,
    ParseAnalysisRequest,
    RewriteRequest,
    RewriteResponse,
)
from docfill.interfaces.fields import AnalysisParseError, SpanOutOfRangeError
from docfill.strategies.fields import detect, parse_analysis_response, rewrite

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/fields", tags=["fields"])


@router.post("/detect", response_model=FieldListResponse)
async def detect_fields(request: DetectRequest) -> FieldListResponse:
    """Detect blank-fill fields in plain text.

    Returned positions index into the submitted text.
    """
    fields = detect(request.text)
    logger.info("fields_detected", field_count=len(fields), text_length=len(request.text))
    return FieldListResponse(fields=fields, count=len(fields))


@router.post("/rewrite", response_model=RewriteResponse)
async def rewrite_content(request: RewriteRequest) -> RewriteResponse:
    """Replace field occurrences in content with placeholder tokens.

    Raises:
        HTTPException: 422 if a positional span does not fit the content.
    """
    try:
        content = rewrite(request.content, request.fields)
    except SpanOutOfRangeError as e:
        logger.warning("rewrite_rejected", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    return RewriteResponse(content=content)


@router.post("/parse-analysis", response_model=FieldListResponse)
async def parse_analysis(request: ParseAnalysisRequest) -> FieldListResponse:
    """Validate a raw model analysis reply and return its fields.

    Raises:
        HTTPException: 422 if the reply cannot be parsed.
    """
    try:
        fields = parse_analysis_response(request.analysis)
    except AnalysisParseError as e:
        logger.warning("analysis_parse_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Failed to parse field analysis results",
        ) from e

    return FieldListResponse(fields=fields, count=len(fields))
