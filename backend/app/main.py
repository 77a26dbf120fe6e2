"""FastAPI application - course PDF portal."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.routes.accounts import router as accounts_router
from backend.app.api.routes.activity import router as activity_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.pdfs import router as pdfs_router
from backend.app.config import get_settings

settings = get_settings()

app = FastAPI(title="Course PDF Portal API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ui_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"ok": false, "error": ...}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(accounts_router)
app.include_router(pdfs_router)
app.include_router(activity_router)

# Uploaded files, laid out as regulation/year/subject/file.pdf
app.mount(
    "/pdfs",
    StaticFiles(directory=settings.pdf_storage_root, check_dir=False),
    name="pdfs",
)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Course PDF Portal API. Use POST /api/find-pdf", "version": "0.1.0"}
