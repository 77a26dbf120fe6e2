"""PDF endpoints - chat lookup, catalog listing and admin upload/delete."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.app.api.auth import AdminContext, identify_caller
from backend.app.api.deps import AppSettings, Catalog, Storage, Users
from backend.app.db.repositories import CatalogError
from backend.app.models.common import (
    YEAR_VALUES,
    SortOrder,
    capitalize_first,
    normalize_regulation,
)
from backend.app.models.documents import NewPdfDocument, PdfDocument
from backend.app.models.query import CatalogFilter, ExtractedFields, ResolutionEnvelope
from backend.app.query.extractor import extract
from backend.app.query.resolver import resolve_text
from backend.app.storage.files import StorageError

router = APIRouter(prefix="/api", tags=["pdfs"])
logger = logging.getLogger(__name__)


class FindPdfRequest(BaseModel):
    """Request body for POST /api/find-pdf."""

    message: str | None = None
    username: str | None = None


class ParseRequest(BaseModel):
    """Request body for POST /api/test-parse."""

    message: str | None = None


class ParseResponse(BaseModel):
    """Response for POST /api/test-parse."""

    message: str | None
    parsed: ExtractedFields


class PdfListResponse(BaseModel):
    """Response for catalog listings."""

    ok: bool = True
    count: int
    pdfs: list[PdfDocument]


class UploadResponse(BaseModel):
    """Response for POST /api/upload-pdf."""

    ok: bool = True
    pdf: PdfDocument


class DeleteResponse(BaseModel):
    """Response for DELETE /api/delete-pdf/{pdf_id}."""

    ok: bool = True
    pdf_id: uuid.UUID
    file_removed: bool


@router.post("/find-pdf", response_model=ResolutionEnvelope)
async def find_pdf(
    request: FindPdfRequest,
    users: Users,
    catalog: Catalog,
    settings: AppSettings,
) -> ResolutionEnvelope | JSONResponse:
    """Resolve a free-text request to catalog documents.

    The caller must be a known user; identity is checked before the text is
    even looked at.

    Raises:
        HTTPException: 403 for missing/unknown username, 400 for empty message
    """
    ctx = await identify_caller(request.username, users)

    message = (request.message or "").strip()
    if not message:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="message required")

    logger.info(f"[POST /api/find-pdf] username={ctx.username} message={message!r}")

    try:
        return await resolve_text(
            message,
            catalog,
            relaxed_limit=settings.relaxed_tier_limit,
            subject_limit=settings.subject_tier_limit,
            sample_limit=settings.sample_tier_limit,
        )
    except CatalogError as e:
        logger.error(f"[POST /api/find-pdf] username={ctx.username} failed: {e}", exc_info=True)
        failure = ResolutionEnvelope(success=False, found=False, error="internal error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(mode="json"),
        )


@router.post("/test-parse", response_model=ParseResponse)
async def test_parse(request: ParseRequest) -> ParseResponse:
    """Expose the extractor for debugging."""
    return ParseResponse(message=request.message, parsed=extract(request.message))


@router.get("/list-pdfs", response_model=PdfListResponse)
async def list_pdfs(catalog: Catalog, settings: AppSettings) -> PdfListResponse:
    """List up to ``list_pdfs_limit`` catalog entries."""
    pdfs = await catalog.find_documents(CatalogFilter(), limit=settings.list_pdfs_limit)
    return PdfListResponse(count=len(pdfs), pdfs=pdfs)


@router.get("/all-pdfs", response_model=PdfListResponse)
async def all_pdfs(ctx: AdminContext, catalog: Catalog) -> PdfListResponse:
    """List every catalog entry, newest first (admin)."""
    pdfs = await catalog.find_documents(CatalogFilter(), sort=SortOrder.newest_first)
    return PdfListResponse(count=len(pdfs), pdfs=pdfs)


@router.post("/upload-pdf", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_pdf(
    ctx: AdminContext,
    catalog: Catalog,
    storage: Storage,
    subject: Annotated[str, Form(min_length=1)],
    regulation: Annotated[str, Form(min_length=1)],
    year: Annotated[str, Form(min_length=1)],
    pdf: Annotated[UploadFile, File()],
    name: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form(description="Comma-separated tags")] = None,
) -> UploadResponse:
    """Store an uploaded PDF under regulation/year/subject and catalog it (admin).

    Raises:
        HTTPException: 400 for invalid taxonomy or a non-PDF file, 500 if the
            catalog insert fails (the stored file is removed again)
    """
    try:
        regulation_code = normalize_regulation(regulation)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    year_digit = year.strip()
    if year_digit not in YEAR_VALUES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="year must be one of 1, 2, 3, 4"
        )

    filename = pdf.filename or ""
    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF files allowed"
        )

    subject_name = capitalize_first(subject.strip().lower())
    content = await pdf.read()

    try:
        stored = await storage.save(
            regulation=regulation_code,
            year=year_digit,
            subject=subject_name,
            filename=filename,
            content=content,
        )
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    try:
        document = await catalog.add_document(
            NewPdfDocument(
                subject=subject_name,
                regulation=regulation_code,
                year=year_digit,
                pdf_url=stored.public_url,
                name=name,
                tags=[t.strip() for t in (tags or "").split(",") if t.strip()],
            )
        )
    except CatalogError as e:
        logger.error(
            f"[POST /api/upload-pdf] admin={ctx.username} catalog insert failed: {e}",
            exc_info=True,
        )
        # A stored file must always have a catalog record
        await storage.delete_by_url(stored.public_url)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save PDF"
        ) from e

    logger.info(
        f"[POST /api/upload-pdf] admin={ctx.username} pdf_id={document.pdf_id} "
        f"path={stored.relative_path}"
    )
    return UploadResponse(pdf=document)


@router.delete("/delete-pdf/{pdf_id}", response_model=DeleteResponse)
async def delete_pdf(
    pdf_id: uuid.UUID,
    ctx: AdminContext,
    catalog: Catalog,
    storage: Storage,
) -> DeleteResponse:
    """Remove the stored file and its catalog entry (admin).

    Raises:
        HTTPException: 404 if the document does not exist
    """
    document = await catalog.get_document(pdf_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="PDF not found")

    try:
        file_removed = await storage.delete_by_url(document.pdf_url)
    except StorageError as e:
        logger.warning(f"[DELETE /api/delete-pdf/{pdf_id}] storage path rejected: {e}")
        file_removed = False

    await catalog.delete_document(pdf_id)

    logger.info(
        f"[DELETE /api/delete-pdf/{pdf_id}] admin={ctx.username} file_removed={file_removed}"
    )
    return DeleteResponse(pdf_id=pdf_id, file_removed=file_removed)
