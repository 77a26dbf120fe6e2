"""Local file storage for uploaded PDFs.

Files live under ``<root>/<regulation>/<year>/<subject>/<token>-<filename>``
and are served statically from ``<public_base_url>/<same relative path>``.
The token is fresh per upload, so a stored file is never overwritten.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a PDF cannot be stored or resolved to a storage path."""


@dataclass(frozen=True)
class StoredFile:
    """Location of a stored PDF."""

    relative_path: str
    public_url: str


def _safe_segment(value: str) -> str:
    segment = value.strip()
    if not segment or segment in (".", "..") or "/" in segment or "\\" in segment:
        raise StorageError(f"invalid path segment: {value!r}")
    return segment


def storage_relative_path(regulation: str, year: str, subject: str, filename: str) -> str:
    """Build ``regulation/year/subject/filename`` with each segment validated."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    parts = [_safe_segment(p) for p in (regulation, year, subject, name)]
    return "/".join(parts)


def unique_filename(filename: str) -> str:
    """Prefix the client's base filename with a random token."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    return f"{uuid.uuid4().hex[:12]}-{name}"


def public_url_for(public_base_url: str, relative_path: str) -> str:
    """Join the public base URL and a relative storage path."""
    return f"{public_base_url.rstrip('/')}/{relative_path}"


def relative_path_from_url(public_base_url: str, pdf_url: str) -> str | None:
    """Recover the storage path from a public URL; None if not ours."""
    prefix = public_base_url.rstrip("/") + "/"
    if not pdf_url.startswith(prefix):
        return None
    return pdf_url[len(prefix) :]


class LocalPdfStorage:
    """Filesystem-backed PDF storage."""

    def __init__(self, root: str | Path, public_base_url: str) -> None:
        self._root = Path(root)
        self._public_base_url = public_base_url

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative_path: str) -> Path:
        path = (self._root / relative_path).resolve()
        if not path.is_relative_to(self._root.resolve()):
            raise StorageError(f"path escapes storage root: {relative_path!r}")
        return path

    async def save(
        self, *, regulation: str, year: str, subject: str, filename: str, content: bytes
    ) -> StoredFile:
        """Write a PDF under a fresh name, creating directories as needed.

        Raises:
            StorageError: For invalid path segments, a name collision or an
                I/O failure
        """
        relative_path = storage_relative_path(
            regulation, year, subject, unique_filename(filename)
        )
        path = self._resolve(relative_path)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Exclusive create: never replace an existing file
            with open(path, "xb") as f:
                f.write(content)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(f"failed to write {relative_path}: {e}") from e

        logger.info(f"Stored PDF at {relative_path} ({len(content)} bytes)")
        return StoredFile(
            relative_path=relative_path,
            public_url=public_url_for(self._public_base_url, relative_path),
        )

    async def delete_by_url(self, pdf_url: str) -> bool:
        """Remove the file behind a public URL.

        Returns:
            True if a file was removed, False if it was already gone or the
            URL points outside this storage
        """
        relative_path = relative_path_from_url(self._public_base_url, pdf_url)
        if relative_path is None:
            logger.warning(f"PDF URL not managed by local storage: {pdf_url}")
            return False

        path = self._resolve(relative_path)
        if not path.exists():
            logger.warning(f"Stored PDF already missing: {relative_path}")
            return False

        await asyncio.to_thread(path.unlink)
        logger.info(f"Deleted stored PDF {relative_path}")
        return True
