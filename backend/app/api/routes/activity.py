"""Activity endpoints - POST /api/activity and admin reporting."""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from backend.app.api.auth import AdminContext
from backend.app.api.deps import Activities, AppSettings, Catalog, Users
from backend.app.models.activity import BranchActivitySummary, StudentActivitySummary
from backend.app.models.common import ActivityAction, Role
from backend.app.models.query import CatalogFilter
from backend.app.reports.activity import summarize_branch, summarize_students
from backend.app.utils.metrics import PrometheusQueryMetrics

router = APIRouter(prefix="/api", tags=["activity"])
logger = logging.getLogger(__name__)

_metrics = PrometheusQueryMetrics()


class LogActivityRequest(BaseModel):
    """Request body for POST /api/activity."""

    username: str | None = None
    pdf_id: str | None = None
    action: str | None = None


class LogActivityResponse(BaseModel):
    """Response for POST /api/activity."""

    ok: bool = True
    activity_id: uuid.UUID
    message: str = "Activity logged with user details"


class StudentsWithActivityResponse(BaseModel):
    """Response for GET /api/students-with-activity."""

    ok: bool = True
    branch: str
    students: list[StudentActivitySummary]


class ActivitySummaryResponse(BaseModel):
    """Response for GET /api/activity-summary."""

    ok: bool = True
    summary: BranchActivitySummary


@router.post("/activity", response_model=LogActivityResponse)
async def log_activity(
    request: LogActivityRequest,
    users: Users,
    activities: Activities,
) -> LogActivityResponse:
    """Append a view/download record, copying branch and year from the user.

    Raises:
        HTTPException: 400 for missing or malformed fields, 404 for unknown user
    """
    if not (request.username and request.pdf_id and request.action):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing fields")

    try:
        pdf_id = uuid.UUID(request.pdf_id)
        action = ActivityAction(request.action)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="pdf_id must be a UUID and action one of: view, download",
        ) from e

    account = await users.get_user(request.username)
    if account is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    record = await activities.append(
        username=account.username,
        pdf_id=pdf_id,
        action=action,
        branch=account.branch,
        year=account.year,
    )
    _metrics.inc_activity(action.value)

    logger.info(
        f"[POST /api/activity] username={account.username} pdf_id={pdf_id} action={action.value}"
    )
    return LogActivityResponse(activity_id=record.activity_id)


@router.get("/students-with-activity", response_model=StudentsWithActivityResponse)
async def students_with_activity(
    ctx: AdminContext,
    users: Users,
    activities: Activities,
    settings: AppSettings,
    branch: Annotated[str | None, Query(min_length=1)] = None,
) -> StudentsWithActivityResponse:
    """Per-student activity for a branch (defaults to the admin's branch)."""
    target_branch = branch or ctx.branch

    students = await users.list_users(branch=target_branch, role=Role.student)
    records = await activities.list_activity(branch=target_branch)

    return StudentsWithActivityResponse(
        branch=target_branch,
        students=summarize_students(students, records, settings.activity_recent_limit),
    )


@router.get("/activity-summary", response_model=ActivitySummaryResponse)
async def activity_summary(
    ctx: AdminContext,
    activities: Activities,
    catalog: Catalog,
    branch: Annotated[str | None, Query(min_length=1)] = None,
) -> ActivitySummaryResponse:
    """Branch totals and most-accessed documents (defaults to the admin's branch)."""
    target_branch = branch or ctx.branch

    records = await activities.list_activity(branch=target_branch)
    documents = {doc.pdf_id: doc for doc in await catalog.find_documents(CatalogFilter())}

    return ActivitySummaryResponse(summary=summarize_branch(target_branch, records, documents))
