"""Activity roll-ups for the admin dashboard."""

from collections import Counter
from collections.abc import Mapping, Sequence
from uuid import UUID

from backend.app.models.activity import (
    ActivityRecord,
    BranchActivitySummary,
    DocumentAccessCount,
    StudentActivitySummary,
)
from backend.app.models.common import ActivityAction
from backend.app.models.documents import PdfDocument
from backend.app.models.users import UserAccount


def summarize_students(
    students: Sequence[UserAccount],
    activities: Sequence[ActivityRecord],
    recent_limit: int = 20,
) -> list[StudentActivitySummary]:
    """Build one summary per student, including students with no activity.

    Args:
        students: Accounts to report on
        activities: Activity rows, newest first
        recent_limit: Max recent rows attached per student

    Returns:
        Summaries sorted by most recent activity, inactive students last
    """
    by_user: dict[str, list[ActivityRecord]] = {s.username: [] for s in students}
    for record in activities:
        if record.username in by_user:
            by_user[record.username].append(record)

    summaries: list[StudentActivitySummary] = []
    for student in students:
        records = by_user[student.username]
        summaries.append(
            StudentActivitySummary(
                username=student.username,
                branch=student.branch,
                year=student.year,
                views=sum(1 for r in records if r.action is ActivityAction.view),
                downloads=sum(1 for r in records if r.action is ActivityAction.download),
                last_active=records[0].timestamp if records else None,
                recent=records[:recent_limit],
            )
        )

    # Active students first (newest activity first), then alphabetical
    summaries.sort(key=lambda s: s.username)
    summaries.sort(
        key=lambda s: s.last_active.timestamp() if s.last_active else float("-inf"),
        reverse=True,
    )
    return summaries


def summarize_branch(
    branch: str,
    activities: Sequence[ActivityRecord],
    documents: Mapping[UUID, PdfDocument],
    top_n: int = 5,
) -> BranchActivitySummary:
    """Totals for a branch plus its most-accessed documents.

    Args:
        branch: Branch name
        activities: Activity rows for the branch
        documents: Known documents by ID (deleted ones are reported without taxonomy)
        top_n: How many documents to list

    Returns:
        Branch summary
    """
    access_counts = Counter(record.pdf_id for record in activities)

    top_documents: list[DocumentAccessCount] = []
    for pdf_id, count in access_counts.most_common(top_n):
        doc = documents.get(pdf_id)
        top_documents.append(
            DocumentAccessCount(
                pdf_id=pdf_id,
                subject=doc.subject if doc else None,
                regulation=doc.regulation if doc else None,
                year=doc.year if doc else None,
                count=count,
            )
        )

    return BranchActivitySummary(
        branch=branch,
        total_views=sum(1 for r in activities if r.action is ActivityAction.view),
        total_downloads=sum(1 for r in activities if r.action is ActivityAction.download),
        active_students=len({r.username for r in activities}),
        top_documents=top_documents,
    )
