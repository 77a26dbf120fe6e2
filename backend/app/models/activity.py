"""Activity log and reporting models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from backend.app.models.common import ActivityAction


class ActivityRecord(BaseModel):
    """Append-only record of a view or download."""

    activity_id: UUID
    username: str
    pdf_id: UUID
    action: ActivityAction
    branch: str
    year: str
    timestamp: datetime


class StudentActivitySummary(BaseModel):
    """Per-student activity roll-up for administrators."""

    username: str
    branch: str
    year: str
    views: int = 0
    downloads: int = 0
    last_active: datetime | None = None
    recent: list[ActivityRecord] = Field(default_factory=list)


class DocumentAccessCount(BaseModel):
    """Access count for a single document."""

    pdf_id: UUID
    subject: str | None = None
    regulation: str | None = None
    year: str | None = None
    count: int


class BranchActivitySummary(BaseModel):
    """Per-branch totals."""

    branch: str
    total_views: int = 0
    total_downloads: int = 0
    active_students: int = 0
    top_documents: list[DocumentAccessCount] = Field(default_factory=list)
