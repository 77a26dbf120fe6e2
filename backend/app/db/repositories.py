"""Repository protocol interfaces for data access."""

from typing import Protocol
from uuid import UUID

from backend.app.models.activity import ActivityRecord
from backend.app.models.common import ActivityAction, Role, SortOrder
from backend.app.models.documents import NewPdfDocument, PdfDocument
from backend.app.models.query import CatalogFilter
from backend.app.models.users import UserAccount


class CatalogError(Exception):
    """Raised when the document catalog cannot be queried or updated."""


class DuplicateUserError(Exception):
    """Raised when registering a username that already exists."""


class UserRepository(Protocol):
    """Repository for account operations."""

    async def get_user(self, username: str) -> UserAccount | None:
        """Get account by username.

        Args:
            username: Unique username

        Returns:
            Account or None if not found
        """
        ...

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        branch: str,
        year: str,
    ) -> UserAccount:
        """Create a new account.

        Raises:
            DuplicateUserError: If the username is taken
        """
        ...

    async def list_users(
        self, *, branch: str | None = None, role: Role | None = None
    ) -> list[UserAccount]:
        """List accounts, optionally filtered by branch and role."""
        ...


class CatalogRepository(Protocol):
    """Repository for the PDF catalog."""

    async def find_documents(
        self,
        doc_filter: CatalogFilter,
        limit: int | None = None,
        sort: SortOrder = SortOrder.unsorted,
    ) -> list[PdfDocument]:
        """Find documents matching a filter.

        Args:
            doc_filter: Field conditions (case-insensitive substring or exact)
            limit: Optional result cap
            sort: Ordering; unsorted means upload order (oldest first)

        Returns:
            Matching documents

        Raises:
            CatalogError: If the underlying store fails
        """
        ...

    async def get_document(self, pdf_id: UUID) -> PdfDocument | None:
        """Get a document by ID."""
        ...

    async def add_document(self, document: NewPdfDocument) -> PdfDocument:
        """Insert a catalog entry and return the stored record."""
        ...

    async def delete_document(self, pdf_id: UUID) -> PdfDocument | None:
        """Delete a catalog entry.

        Returns:
            The deleted record or None if it did not exist
        """
        ...

    async def clear(self) -> int:
        """Delete every catalog entry; returns the number removed."""
        ...


class ActivityRepository(Protocol):
    """Append-only activity log."""

    async def append(
        self,
        *,
        username: str,
        pdf_id: UUID,
        action: ActivityAction,
        branch: str,
        year: str,
    ) -> ActivityRecord:
        """Append one activity record."""
        ...

    async def list_activity(
        self, *, branch: str | None = None, username: str | None = None
    ) -> list[ActivityRecord]:
        """List activity newest first, optionally filtered by branch or user."""
        ...
