"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# Re-export field models for API consumers
from docfill.strategies.fields import FieldDescriptor


# =============================================================================
# Field Schemas
# =============================================================================


class DetectRequest(BaseModel):
    """Request schema for stateless pattern detection."""

    text: str = Field(description="Plain text to scan for blank-fill fields")


class FieldListResponse(BaseModel):
    """Response carrying a list of fields."""

    fields: list[FieldDescriptor]
    count: int = Field(description="Number of fields returned")


class RewriteRequest(BaseModel):
    """Request schema for stateless placeholder substitution."""

    content: str = Field(description="Text or markup to rewrite")
    fields: list[FieldDescriptor] = Field(
        default_factory=list,
        description="Fields to substitute, positional or name-only",
    )


class RewriteResponse(BaseModel):
    """Response for placeholder substitution."""

    content: str


class ParseAnalysisRequest(BaseModel):
    """Request schema for validating a raw model analysis reply."""

    analysis: str = Field(description="Raw reply text from the model")


# =============================================================================
# Document Schemas
# =============================================================================


class DocumentUploadResponse(BaseModel):
    """Response for document upload."""

    document_id: uuid.UUID = Field(description="ID of the created document session")
    filename: str
    text: str = Field(description="Extracted plain text")
    html: str = Field(description="Extracted markup")


class DocumentResponse(BaseModel):
    """Snapshot of a document session."""

    document_id: uuid.UUID
    filename: str
    text: str
    html: str
    fields: list[FieldDescriptor]
    created_at: datetime


class PlaceholderRequest(BaseModel):
    """Request for applying placeholders to a document session."""

    target: Literal["text", "html"] = Field(
        default="html",
        description="Which content to rewrite",
    )


class PlaceholderResponse(BaseModel):
    """Response after applying placeholders."""

    content: str
    target: Literal["text", "html"]
    field_count: int


# =============================================================================
# Chat Schemas
# =============================================================================


class ChatRequest(BaseModel):
    """Request schema for the document assistant."""

    message: str = Field(min_length=1, description="User message")
    context: str | None = Field(default=None, description="Extra context for the assistant")


class ChatResponse(BaseModel):
    """Response from the document assistant."""

    response: str


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str
    error_code: str | None = None
