"""Global pytest configuration."""

import os

# Set DATABASE_URL and storage root for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PDF_STORAGE_ROOT", "data/test-pdfs")
