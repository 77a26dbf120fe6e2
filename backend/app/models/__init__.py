"""Models package - re-exports for convenience."""

from backend.app.models.activity import (
    ActivityRecord,
    BranchActivitySummary,
    DocumentAccessCount,
    StudentActivitySummary,
)
from backend.app.models.common import (
    ActivityAction,
    MatchKind,
    MatchMode,
    Role,
    SortOrder,
)
from backend.app.models.documents import NewPdfDocument, PdfDocument
from backend.app.models.query import (
    CatalogFilter,
    ExtractedFields,
    FieldCondition,
    QueryTier,
    ResolutionEnvelope,
    TierResult,
)
from backend.app.models.users import UserAccount, UserProfile

__all__ = [
    # Common
    "ActivityAction",
    "MatchKind",
    "MatchMode",
    "Role",
    "SortOrder",
    # Documents
    "PdfDocument",
    "NewPdfDocument",
    # Query
    "ExtractedFields",
    "FieldCondition",
    "CatalogFilter",
    "QueryTier",
    "TierResult",
    "ResolutionEnvelope",
    # Users
    "UserAccount",
    "UserProfile",
    # Activity
    "ActivityRecord",
    "StudentActivitySummary",
    "DocumentAccessCount",
    "BranchActivitySummary",
]
