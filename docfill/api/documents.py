"""Document session API routes.

Handles document upload, field detection and model analysis, and
placeholder substitution for an uploaded document.
"""

import uuid
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from docfill.api.deps import get_field_analyzer, get_session_store, get_text_extractor
from docfill.api.schemas import (
    DocumentResponse,
    DocumentUploadResponse,
    FieldListResponse,
    PlaceholderRequest,
    PlaceholderResponse,
)
from docfill.core.config import Settings, get_settings
from docfill.interfaces.extractor import BaseTextExtractor, ExtractionError
from docfill.interfaces.fields import (
    AnalysisParseError,
    BaseFieldAnalyzer,
    ModelRequestError,
    NoFieldsError,
    SessionNotFoundError,
)
from docfill.strategies.session import DocumentSession, SessionStore

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])

UPLOAD_CHUNK_BYTES = 1024 * 1024


def _get_session(store: SessionStore, document_id: uuid.UUID) -> DocumentSession:
    try:
        return store.get(document_id)
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found. Please upload it again.",
        ) from e


async def _read_limited(file: UploadFile, limit: int) -> bytes:
    """Read an upload, failing with 413 as soon as it exceeds ``limit`` bytes."""
    too_large = HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"File exceeds the {limit} byte limit",
    )
    if file.size is not None and file.size > limit:
        raise too_large

    chunks: list[bytes] = []
    received = 0
    while chunk := await file.read(UPLOAD_CHUNK_BYTES):
        received += len(chunk)
        if received > limit:
            raise too_large
        chunks.append(chunk)
    return b"".join(chunks)


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    file: UploadFile,
    store: SessionStore = Depends(get_session_store),
    extractor: BaseTextExtractor = Depends(get_text_extractor),
    settings: Settings = Depends(get_settings),
) -> DocumentUploadResponse:
    """Upload a Word document and open an editing session for it.

    Returns:
        The session id with the extracted text and markup.

    Raises:
        HTTPException: 415 for unsupported files, 413 for oversize uploads,
            422 if the document cannot be read.
    """
    try:
        logger.info("document_upload_received", filename=file.filename)

        if not file.filename or not extractor.supports(file.filename):
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail="Only .docx files are supported",
            )

        content = await _read_limited(file, settings.max_upload_bytes)

        temp_dir = Path(settings.upload_dir) / "documents"
        temp_dir.mkdir(parents=True, exist_ok=True)
        temp_file_path = temp_dir / f"{uuid.uuid4()}_{Path(file.filename).name}"
        temp_file_path.write_bytes(content)

        try:
            extracted = await extractor.extract(str(temp_file_path))
        finally:
            temp_file_path.unlink(missing_ok=True)

        session = store.create(
            filename=file.filename,
            text=extracted.text,
            html=extracted.html,
        )
        logger.info(
            "document_opened",
            document_id=str(session.id),
            filename=session.filename,
            text_length=len(session.text),
        )

        return DocumentUploadResponse(
            document_id=session.id,
            filename=session.filename,
            text=session.text,
            html=session.html,
        )

    except HTTPException:
        raise
    except ExtractionError as e:
        logger.warning("document_unreadable", filename=file.filename, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Could not read document: {e}",
        ) from e
    except Exception as e:
        logger.error("document_upload_failed", filename=file.filename, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Document upload failed: {str(e)}",
        ) from e


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
) -> DocumentResponse:
    """Return the current state of a document session."""
    session = _get_session(store, document_id)
    return DocumentResponse(
        document_id=session.id,
        filename=session.filename,
        text=session.text,
        html=session.html,
        fields=session.fields,
        created_at=session.created_at,
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
) -> None:
    """Close a document session and discard its fields."""
    try:
        store.delete(document_id)
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        ) from e


@router.post("/{document_id}/detect", response_model=FieldListResponse)
async def detect_document_fields(
    document_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
) -> FieldListResponse:
    """Run pattern detection over the document text."""
    session = _get_session(store, document_id)
    fields = session.detect_fields()
    return FieldListResponse(fields=fields, count=len(fields))


@router.post("/{document_id}/analyze", response_model=FieldListResponse)
async def analyze_document_fields(
    document_id: uuid.UUID,
    store: SessionStore = Depends(get_session_store),
    analyzer: BaseFieldAnalyzer = Depends(get_field_analyzer),
) -> FieldListResponse:
    """Ask the language model to identify fillable fields.

    On an unusable reply the previously identified fields are kept.

    Raises:
        HTTPException: 400 for an empty document, 422 if the reply cannot be
            parsed, 502 if the model request fails.
    """
    session = _get_session(store, document_id)

    try:
        raw = await analyzer.request_analysis(session.text)
        fields = session.apply_analysis(raw)
    except AnalysisParseError as e:
        logger.warning("analysis_parse_failed", document_id=str(document_id), error=str(e))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Failed to parse field analysis results",
        ) from e
    except ModelRequestError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to analyze document for fillable fields",
        ) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return FieldListResponse(fields=fields, count=len(fields))


@router.post("/{document_id}/placeholders", response_model=PlaceholderResponse)
async def apply_placeholders(
    document_id: uuid.UUID,
    request: PlaceholderRequest | None = None,
    store: SessionStore = Depends(get_session_store),
) -> PlaceholderResponse:
    """Substitute identified fields in the document with placeholder tokens.

    Raises:
        HTTPException: 400 if no fields have been identified yet.
    """
    session = _get_session(store, document_id)
    target = request.target if request else "html"

    try:
        content = session.apply_placeholders(target)
    except NoFieldsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please analyze the document first to identify fields",
        ) from e

    return PlaceholderResponse(
        content=content,
        target=target,
        field_count=len(session.fields),
    )
