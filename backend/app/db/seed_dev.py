"""Dev seeding: catalog every PDF under the storage root and ensure an admin.

Folder layout understood by the scanner::

    <root>/r23/3year/quantum/Quantum.pdf
           ^reg ^year ^subject

Usage:
    python -m backend.app.db.seed_dev
"""

import asyncio
import logging
import re
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.engine import create_tables, get_async_engine
from backend.app.db.repositories import CatalogRepository, UserRepository
from backend.app.db.sql_repositories import SqlCatalogRepository, SqlUserRepository
from backend.app.models.common import Role, capitalize_first
from backend.app.models.documents import NewPdfDocument
from backend.app.storage.files import public_url_for

logger = logging.getLogger(__name__)

_REGULATION_DIR_RE = re.compile(r"^r\d{2,3}$", re.IGNORECASE)
_YEAR_DIR_RE = re.compile(r"\b([1-4])year\b", re.IGNORECASE)


def find_pdf_files(root: Path) -> list[Path]:
    """Recursively list ``*.pdf`` files (case-insensitive), sorted for stable output."""
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == ".pdf")


def parse_pdf_path(path: Path, root: Path, public_base_url: str) -> NewPdfDocument:
    """Derive catalog fields from a file's position under the storage root.

    Missing regulation or year folders leave those fields empty; the subject
    is always the folder holding the file.
    """
    relative = path.relative_to(root)
    folders = relative.parts[:-1]

    regulation = next((p.upper() for p in folders if _REGULATION_DIR_RE.match(p)), None)
    year_match = next((m for m in (_YEAR_DIR_RE.search(p) for p in folders) if m), None)
    subject = folders[-1] if folders else path.stem

    return NewPdfDocument(
        subject=capitalize_first(subject),
        regulation=regulation,
        year=year_match.group(1) if year_match else None,
        pdf_url=public_url_for(public_base_url, relative.as_posix()),
        name=path.stem,
    )


async def seed_catalog_from_folder(
    catalog: CatalogRepository, root: Path, public_base_url: str
) -> int:
    """Replace the catalog with every PDF found under ``root``.

    Returns:
        Number of documents inserted
    """
    paths = find_pdf_files(root) if root.is_dir() else []
    if not paths:
        logger.warning(f"No PDFs found in {root}")
        return 0

    removed = await catalog.clear()
    logger.info(f"Cleared {removed} existing catalog entries")

    for path in paths:
        doc = await catalog.add_document(parse_pdf_path(path, root, public_base_url))
        logger.info(f"- {doc.subject} ({doc.regulation}, Year {doc.year}) -> {doc.pdf_url}")

    return len(paths)


async def ensure_dev_admin(users: UserRepository, settings: Settings) -> None:
    """Create the dev admin account if it does not exist (idempotent)."""
    existing = await users.get_user(settings.dev_admin_username)
    if existing:
        logger.info(f"Dev admin already exists: {existing.username}")
        return

    await users.create_user(
        username=settings.dev_admin_username,
        password=settings.dev_admin_password,
        role=Role.admin,
        branch=settings.dev_admin_branch,
        year="4",
    )
    logger.info(f"Created dev admin {settings.dev_admin_username}")


async def seed_dev() -> None:
    """Create tables, the dev admin and the catalog."""
    settings = get_settings()
    engine = get_async_engine()
    await create_tables(engine)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        await ensure_dev_admin(SqlUserRepository(session), settings)
        count = await seed_catalog_from_folder(
            SqlCatalogRepository(session),
            Path(settings.pdf_storage_root),
            settings.pdf_public_base_url,
        )

    logger.info(f"Seeded {count} PDFs")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_dev())
