"""Integration tests for dev seeding helpers."""

from pathlib import Path

import pytest

from backend.app.config import Settings
from backend.app.db.inmemory import InMemoryCatalogRepository, InMemoryUserRepository
from backend.app.db.seed_dev import (
    ensure_dev_admin,
    find_pdf_files,
    parse_pdf_path,
    seed_catalog_from_folder,
)
from backend.app.models.common import Role
from backend.app.models.documents import NewPdfDocument
from backend.app.models.query import CatalogFilter

BASE_URL = "http://localhost:8000/pdfs"


def _touch(root: Path, relative: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"%PDF-1.4")
    return path


def test_parse_pdf_path_full_layout(tmp_path: Path) -> None:
    path = _touch(tmp_path, "r23/3year/quantum/Quantum.pdf")

    doc = parse_pdf_path(path, tmp_path, BASE_URL)

    assert doc == NewPdfDocument(
        subject="Quantum",
        regulation="R23",
        year="3",
        pdf_url=f"{BASE_URL}/r23/3year/quantum/Quantum.pdf",
        name="Quantum",
    )


def test_parse_pdf_path_missing_taxonomy_folders(tmp_path: Path) -> None:
    path = _touch(tmp_path, "misc/handbook.PDF")

    doc = parse_pdf_path(path, tmp_path, BASE_URL)

    assert doc.subject == "Misc"
    assert doc.regulation is None
    assert doc.year is None
    assert doc.name == "handbook"


def test_find_pdf_files_is_case_insensitive_and_sorted(tmp_path: Path) -> None:
    _touch(tmp_path, "r20/2year/maths/b.pdf")
    _touch(tmp_path, "r20/2year/maths/a.PDF")
    _touch(tmp_path, "r20/2year/maths/notes.txt")

    names = [p.name for p in find_pdf_files(tmp_path)]

    assert names == ["a.PDF", "b.pdf"]


@pytest.mark.asyncio
async def test_seed_catalog_replaces_existing_entries(tmp_path: Path) -> None:
    catalog = InMemoryCatalogRepository()
    await catalog.add_document(NewPdfDocument(subject="Stale", pdf_url="http://old/stale.pdf"))
    _touch(tmp_path, "r23/1year/physics/physics.pdf")
    _touch(tmp_path, "r20/2year/maths/maths.pdf")

    count = await seed_catalog_from_folder(catalog, tmp_path, BASE_URL)

    docs = await catalog.find_documents(CatalogFilter())
    assert count == 2
    assert sorted(d.subject for d in docs) == ["Maths", "Physics"]


@pytest.mark.asyncio
async def test_seed_catalog_without_pdfs_keeps_catalog(tmp_path: Path) -> None:
    catalog = InMemoryCatalogRepository()
    await catalog.add_document(NewPdfDocument(subject="Kept", pdf_url="http://old/kept.pdf"))

    count = await seed_catalog_from_folder(catalog, tmp_path / "missing", BASE_URL)

    assert count == 0
    assert len(await catalog.find_documents(CatalogFilter())) == 1


@pytest.mark.asyncio
async def test_ensure_dev_admin_is_idempotent() -> None:
    users = InMemoryUserRepository()
    settings = Settings(dev_admin_username="root", dev_admin_password="secret")

    await ensure_dev_admin(users, settings)
    await ensure_dev_admin(users, settings)

    admin = await users.get_user("root")
    assert admin is not None
    assert admin.role is Role.admin
    assert admin.password == "secret"
    assert len(await users.list_users()) == 1
