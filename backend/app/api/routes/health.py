"""Health check endpoints.

- /health: liveness, always ok
- /healthz: readiness, checks DB connectivity and the PDF storage root
"""

from pathlib import Path
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_async_engine

router = APIRouter()


async def check_db() -> tuple[bool, str]:
    """Check database connectivity.

    Returns:
        (is_ok, status_message)
    """
    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


def check_storage(settings: Settings) -> tuple[bool, str]:
    """Check that the PDF storage root exists.

    Returns:
        (is_ok, status_message)
    """
    root = Path(settings.pdf_storage_root)
    if not root.exists():
        return (True, "not_created")
    if not root.is_dir():
        return (False, "error: not a directory")
    return (True, "ok")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | JSONResponse:
    """Readiness check.

    Returns:
        200 with component status if core systems ok
        503 if a critical component fails
    """
    settings = get_settings()

    db_ok, db_status = await check_db()
    storage_ok, storage_status = check_storage(settings)

    core_ok = db_ok and storage_ok

    response_body = {
        "status": "ok" if core_ok else "degraded",
        "components": {
            "db": db_status,
            "storage": storage_status,
        },
    }

    if not core_ok:
        return JSONResponse(content=response_body, status_code=503)

    return response_body
