"""Unit tests for in-memory repositories."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from backend.app.db.inmemory import (
    InMemoryActivityRepository,
    InMemoryCatalogRepository,
    InMemoryUserRepository,
)
from backend.app.db.repositories import DuplicateUserError
from backend.app.models.common import ActivityAction, MatchMode, Role, SortOrder
from backend.app.models.documents import NewPdfDocument
from backend.app.models.query import CatalogFilter, FieldCondition


def _doc(subject: str, regulation: str | None = "R23", year: str | None = "1") -> NewPdfDocument:
    return NewPdfDocument(
        subject=subject,
        regulation=regulation,
        year=year,
        pdf_url=f"http://localhost:8000/pdfs/{subject}.pdf",
    )


class TestInMemoryUserRepository:
    """Account storage."""

    @pytest.mark.asyncio
    async def test_create_and_get(self) -> None:
        repo = InMemoryUserRepository()

        created = await repo.create_user(
            username="alice", password="pw", role=Role.student, branch="CSE", year="1"
        )

        assert await repo.get_user("alice") == created
        assert await repo.get_user("nobody") is None

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self) -> None:
        repo = InMemoryUserRepository()
        await repo.create_user(
            username="alice", password="pw", role=Role.student, branch="CSE", year="1"
        )

        with pytest.raises(DuplicateUserError):
            await repo.create_user(
                username="alice", password="other", role=Role.admin, branch="ECE", year="2"
            )

    @pytest.mark.asyncio
    async def test_list_users_filters(self) -> None:
        repo = InMemoryUserRepository()
        await repo.create_user(
            username="alice", password="pw", role=Role.student, branch="CSE", year="1"
        )
        await repo.create_user(
            username="erin", password="pw", role=Role.student, branch="ECE", year="1"
        )
        await repo.create_user(
            username="admin", password="pw", role=Role.admin, branch="CSE", year="4"
        )

        cse_students = await repo.list_users(branch="CSE", role=Role.student)

        assert [u.username for u in cse_students] == ["alice"]
        assert len(await repo.list_users()) == 3


class TestInMemoryCatalogRepository:
    """Catalog filtering, limits and ordering."""

    @pytest.mark.asyncio
    async def test_contains_is_case_insensitive(self) -> None:
        repo = InMemoryCatalogRepository()
        await repo.add_document(_doc("Physics"))

        doc_filter = CatalogFilter(conditions=(FieldCondition(field="subject", value="PHYS"),))

        assert len(await repo.find_documents(doc_filter)) == 1

    @pytest.mark.asyncio
    async def test_equals_is_exact(self) -> None:
        repo = InMemoryCatalogRepository()
        await repo.add_document(_doc("Physics", year="12"))

        contains = CatalogFilter(conditions=(FieldCondition(field="year", value="1"),))
        equals = CatalogFilter(
            conditions=(FieldCondition(field="year", value="1", mode=MatchMode.equals),)
        )

        assert len(await repo.find_documents(contains)) == 1
        assert await repo.find_documents(equals) == []

    @pytest.mark.asyncio
    async def test_missing_field_never_matches_a_condition(self) -> None:
        repo = InMemoryCatalogRepository()
        await repo.add_document(_doc("Physics", regulation=None))

        doc_filter = CatalogFilter(conditions=(FieldCondition(field="regulation", value="R"),))

        assert await repo.find_documents(doc_filter) == []

    @pytest.mark.asyncio
    async def test_empty_filter_matches_everything(self) -> None:
        repo = InMemoryCatalogRepository()
        for subject in ("Physics", "Maths", "Chemistry"):
            await repo.add_document(_doc(subject))

        docs = await repo.find_documents(CatalogFilter())

        assert [d.subject for d in docs] == ["Physics", "Maths", "Chemistry"]

    @pytest.mark.asyncio
    async def test_limit_and_newest_first(self) -> None:
        repo = InMemoryCatalogRepository()
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        await repo.add_document(_doc("Old"), uploaded_at=base)
        await repo.add_document(_doc("Newest"), uploaded_at=base + timedelta(days=2))
        await repo.add_document(_doc("Middle"), uploaded_at=base + timedelta(days=1))

        docs = await repo.find_documents(CatalogFilter(), limit=2, sort=SortOrder.newest_first)

        assert [d.subject for d in docs] == ["Newest", "Middle"]

    @pytest.mark.asyncio
    async def test_unsorted_is_oldest_upload_first(self) -> None:
        repo = InMemoryCatalogRepository()
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        await repo.add_document(_doc("Newest"), uploaded_at=base + timedelta(days=2))
        await repo.add_document(_doc("Old"), uploaded_at=base)
        await repo.add_document(_doc("Middle"), uploaded_at=base + timedelta(days=1))

        docs = await repo.find_documents(CatalogFilter())

        assert [d.subject for d in docs] == ["Old", "Middle", "Newest"]

    @pytest.mark.asyncio
    async def test_same_timestamp_later_insert_is_newer(self) -> None:
        repo = InMemoryCatalogRepository()
        stamp = datetime(2025, 1, 1, tzinfo=timezone.utc)
        await repo.add_document(_doc("First"), uploaded_at=stamp)
        await repo.add_document(_doc("Second"), uploaded_at=stamp)

        docs = await repo.find_documents(CatalogFilter(), sort=SortOrder.newest_first)

        assert [d.subject for d in docs] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_get_delete_and_clear(self) -> None:
        repo = InMemoryCatalogRepository()
        kept = await repo.add_document(_doc("Physics"))
        gone = await repo.add_document(_doc("Maths"))

        assert await repo.get_document(kept.pdf_id) == kept
        assert await repo.delete_document(gone.pdf_id) == gone
        assert await repo.delete_document(gone.pdf_id) is None
        assert await repo.get_document(gone.pdf_id) is None
        assert await repo.clear() == 1
        assert await repo.find_documents(CatalogFilter()) == []


class TestInMemoryActivityRepository:
    """Append-only activity log."""

    @pytest.mark.asyncio
    async def test_list_is_newest_first_and_filterable(self) -> None:
        repo = InMemoryActivityRepository()
        pdf_id = uuid.uuid4()
        first = await repo.append(
            username="alice", pdf_id=pdf_id, action=ActivityAction.view, branch="CSE", year="1"
        )
        second = await repo.append(
            username="erin", pdf_id=pdf_id, action=ActivityAction.download, branch="ECE", year="3"
        )
        third = await repo.append(
            username="alice", pdf_id=pdf_id, action=ActivityAction.download, branch="CSE", year="1"
        )

        assert await repo.list_activity() == [third, second, first]
        assert await repo.list_activity(branch="CSE") == [third, first]
        assert await repo.list_activity(username="erin") == [second]
