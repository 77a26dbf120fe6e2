"""SQL implementations of repository interfaces."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import Activity, Pdf, User
from backend.app.db.repositories import CatalogError, DuplicateUserError
from backend.app.models.activity import ActivityRecord
from backend.app.models.common import ActivityAction, MatchMode, Role, SortOrder
from backend.app.models.documents import NewPdfDocument, PdfDocument
from backend.app.models.query import CatalogFilter
from backend.app.models.users import UserAccount


def _to_account(user: User) -> UserAccount:
    return UserAccount(
        username=user.username,
        password=user.password,
        role=Role(user.role),
        branch=user.branch,
        year=user.year,
        created_at=user.created_at,
    )


def _to_document(pdf: Pdf) -> PdfDocument:
    return PdfDocument(
        pdf_id=pdf.pdf_id,
        subject=pdf.subject,
        regulation=pdf.regulation,
        year=pdf.year,
        pdf_url=pdf.pdf_url,
        name=pdf.name,
        tags=list(pdf.tags or []),
        uploaded_at=pdf.uploaded_at,
    )


def _to_activity(row: Activity) -> ActivityRecord:
    return ActivityRecord(
        activity_id=row.activity_id,
        username=row.username,
        pdf_id=row.pdf_id,
        action=ActivityAction(row.action),
        branch=row.branch,
        year=row.year,
        timestamp=row.timestamp,
    )


def apply_catalog_filter(stmt: Select, doc_filter: CatalogFilter) -> Select:
    """Translate field conditions into WHERE clauses.

    Args:
        stmt: Select over the pdf table
        doc_filter: Field conditions

    Returns:
        Statement with one clause per condition
    """
    for condition in doc_filter.conditions:
        column = getattr(Pdf, condition.field)
        if condition.mode is MatchMode.equals:
            stmt = stmt.where(column == condition.value)
        else:
            stmt = stmt.where(column.icontains(condition.value, autoescape=True))
    return stmt


class SqlUserRepository:
    """SQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user(self, username: str) -> UserAccount | None:
        """Get account by username."""
        user = await self._session.get(User, username)
        return _to_account(user) if user else None

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
        if await self._session.get(User, username) is not None:
            raise DuplicateUserError(username)

        user = User(
            username=username,
            password=password,
            role=role.value,
            branch=branch,
            year=year,
            created_at=datetime.now(timezone.utc),
        )
        self._session.add(user)
        account = _to_account(user)

        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateUserError(username) from e

        return account

    async def list_users(
        self, *, branch: str | None = None, role: Role | None = None
    ) -> list[UserAccount]:
        """List accounts, optionally filtered by branch and role."""
        stmt = select(User).order_by(User.username)
        if branch is not None:
            stmt = stmt.where(User.branch == branch)
        if role is not None:
            stmt = stmt.where(User.role == role.value)

        result = await self._session.execute(stmt)
        return [_to_account(user) for user in result.scalars().all()]


class SqlCatalogRepository:
    """SQL implementation of CatalogRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_documents(
        self,
        doc_filter: CatalogFilter,
        limit: int | None = None,
        sort: SortOrder = SortOrder.unsorted,
    ) -> list[PdfDocument]:
        """Find documents matching a filter."""
        stmt = apply_catalog_filter(select(Pdf), doc_filter)

        # Upload order (oldest first) unless asked otherwise; pdf_id breaks ties
        if sort is SortOrder.newest_first:
            stmt = stmt.order_by(Pdf.uploaded_at.desc(), Pdf.pdf_id.desc())
        else:
            stmt = stmt.order_by(Pdf.uploaded_at, Pdf.pdf_id)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise CatalogError(f"catalog query failed: {type(e).__name__}") from e

        return [_to_document(pdf) for pdf in result.scalars().all()]

    async def get_document(self, pdf_id: uuid.UUID) -> PdfDocument | None:
        """Get a document by ID."""
        pdf = await self._session.get(Pdf, pdf_id)
        return _to_document(pdf) if pdf else None

    async def add_document(
        self, document: NewPdfDocument, uploaded_at: datetime | None = None
    ) -> PdfDocument:
        """Insert a catalog entry."""
        pdf = Pdf(
            pdf_id=uuid.uuid4(),
            name=document.name,
            subject=document.subject,
            regulation=document.regulation,
            year=document.year,
            pdf_url=document.pdf_url,
            tags=list(document.tags),
            uploaded_at=uploaded_at or datetime.now(timezone.utc),
        )
        self._session.add(pdf)
        stored = _to_document(pdf)

        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise CatalogError(f"catalog insert failed: {type(e).__name__}") from e

        return stored

    async def delete_document(self, pdf_id: uuid.UUID) -> PdfDocument | None:
        """Delete a catalog entry."""
        pdf = await self._session.get(Pdf, pdf_id)
        if pdf is None:
            return None

        removed = _to_document(pdf)
        await self._session.delete(pdf)
        await self._session.commit()
        return removed

    async def clear(self) -> int:
        """Delete every catalog entry."""
        result = await self._session.execute(delete(Pdf))
        await self._session.commit()
        return result.rowcount or 0


class SqlActivityRepository:
    """SQL implementation of ActivityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

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
        row = Activity(
            activity_id=uuid.uuid4(),
            username=username,
            pdf_id=pdf_id,
            action=action.value,
            branch=branch,
            year=year,
            timestamp=datetime.now(timezone.utc),
        )
        self._session.add(row)
        record = _to_activity(row)
        await self._session.commit()
        return record

    async def list_activity(
        self, *, branch: str | None = None, username: str | None = None
    ) -> list[ActivityRecord]:
        """List activity newest first."""
        stmt = select(Activity).order_by(Activity.timestamp.desc())
        if branch is not None:
            stmt = stmt.where(Activity.branch == branch)
        if username is not None:
            stmt = stmt.where(Activity.username == username)

        result = await self._session.execute(stmt)
        return [_to_activity(row) for row in result.scalars().all()]
