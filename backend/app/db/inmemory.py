"""In-memory implementations of repository interfaces."""

import itertools
import uuid
from datetime import datetime, timezone

from backend.app.db.repositories import DuplicateUserError
from backend.app.models.activity import ActivityRecord
from backend.app.models.common import ActivityAction, Role, SortOrder
from backend.app.models.documents import NewPdfDocument, PdfDocument
from backend.app.models.query import CatalogFilter
from backend.app.models.users import UserAccount


class InMemoryUserRepository:
    """In-memory implementation of UserRepository."""

    def __init__(self) -> None:
        self._users: dict[str, UserAccount] = {}

    async def get_user(self, username: str) -> UserAccount | None:
        """Get account by username."""
        return self._users.get(username)

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        role: Role,
        branch: str,
        year: str,
    ) -> UserAccount:
        """Create a new account."""
        if username in self._users:
            raise DuplicateUserError(username)

        account = UserAccount(
            username=username,
            password=password,
            role=role,
            branch=branch,
            year=year,
            created_at=datetime.now(timezone.utc),
        )
        self._users[username] = account
        return account

    async def list_users(
        self, *, branch: str | None = None, role: Role | None = None
    ) -> list[UserAccount]:
        """List accounts, optionally filtered by branch and role."""
        return [
            account
            for account in self._users.values()
            if (branch is None or account.branch == branch)
            and (role is None or account.role == role)
        ]


class InMemoryCatalogRepository:
    """In-memory implementation of CatalogRepository.

    Unsorted results come in upload order (oldest first); an insertion
    counter breaks ties between identical upload timestamps.
    """

    def __init__(self) -> None:
        self._documents: dict[uuid.UUID, tuple[int, PdfDocument]] = {}
        self._counter = itertools.count()

    async def find_documents(
        self,
        doc_filter: CatalogFilter,
        limit: int | None = None,
        sort: SortOrder = SortOrder.unsorted,
    ) -> list[PdfDocument]:
        """Find documents matching a filter."""
        entries = [
            (seq, doc) for seq, doc in self._documents.values() if doc_filter.matches(doc)
        ]

        entries.sort(
            key=lambda x: (x[1].uploaded_at, x[0]), reverse=sort is SortOrder.newest_first
        )

        documents = [doc for _, doc in entries]
        return documents if limit is None else documents[:limit]

    async def get_document(self, pdf_id: uuid.UUID) -> PdfDocument | None:
        """Get a document by ID."""
        entry = self._documents.get(pdf_id)
        return entry[1] if entry else None

    async def add_document(
        self, document: NewPdfDocument, uploaded_at: datetime | None = None
    ) -> PdfDocument:
        """Insert a catalog entry.

        Args:
            document: Fields of the new entry
            uploaded_at: Override the upload timestamp (for tests and seeding)
        """
        stored = PdfDocument(
            pdf_id=uuid.uuid4(),
            uploaded_at=uploaded_at or datetime.now(timezone.utc),
            **document.model_dump(),
        )
        self._documents[stored.pdf_id] = (next(self._counter), stored)
        return stored

    async def delete_document(self, pdf_id: uuid.UUID) -> PdfDocument | None:
        """Delete a catalog entry."""
        entry = self._documents.pop(pdf_id, None)
        return entry[1] if entry else None

    async def clear(self) -> int:
        """Delete every catalog entry."""
        removed = len(self._documents)
        self._documents.clear()
        return removed


class InMemoryActivityRepository:
    """In-memory implementation of ActivityRepository."""

    def __init__(self) -> None:
        self._records: list[ActivityRecord] = []

    async def append(
        self,
        *,
        username: str,
        pdf_id: uuid.UUID,
        action: ActivityAction,
        branch: str,
        year: str,
    ) -> ActivityRecord:
        """Append one activity record."""
        record = ActivityRecord(
            activity_id=uuid.uuid4(),
            username=username,
            pdf_id=pdf_id,
            action=action,
            branch=branch,
            year=year,
            timestamp=datetime.now(timezone.utc),
        )
        self._records.append(record)
        return record

    async def list_activity(
        self, *, branch: str | None = None, username: str | None = None
    ) -> list[ActivityRecord]:
        """List activity newest first."""
        # Appends are chronological, so reverse insertion order is newest first
        return [
            record
            for record in reversed(self._records)
            if (branch is None or record.branch == branch)
            and (username is None or record.username == username)
        ]
