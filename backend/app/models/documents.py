"""Document catalog domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PdfDocument(BaseModel):
    """Catalog entry for an uploaded course PDF."""

    pdf_id: UUID
    subject: str
    regulation: str | None = None
    year: str | None = None
    pdf_url: str
    name: str | None = None
    tags: list[str] = Field(default_factory=list)
    uploaded_at: datetime


class NewPdfDocument(BaseModel):
    """Fields required to insert a catalog entry."""

    subject: str = Field(..., min_length=1)
    regulation: str | None = None
    year: str | None = None
    pdf_url: str = Field(..., min_length=1)
    name: str | None = None
    tags: list[str] = Field(default_factory=list)
