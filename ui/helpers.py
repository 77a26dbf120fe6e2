"""Helper functions for the chat UI - API client calls and message shaping."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def get_auth_header(username: str) -> dict[str, str]:
    """Get auth header for admin API calls."""
    return {"Authorization": f"Bearer {username}"}


def call_login(backend_url: str, username: str, password: str) -> dict[str, Any]:
    """Call /api/login.

    Returns:
        Profile dict on success, or ``{"ok": False, "error": ...}`` on a 400

    Raises:
        httpx.HTTPStatusError: For non-400 failures
    """
    response = httpx.post(
        f"{backend_url}/api/login",
        json={"username": username, "password": password},
        timeout=10.0,
    )
    if response.status_code == 400:
        result: dict[str, Any] = response.json()
        return result
    response.raise_for_status()
    profile: dict[str, Any] = response.json()
    return profile


def call_find_pdf(backend_url: str, message: str, username: str) -> dict[str, Any]:
    """Call /api/find-pdf with a free-text request.

    403 (login required) and 500 (internal error) bodies are returned as-is so
    the chat can show them; other failures raise.

    Raises:
        httpx.HTTPStatusError: If request fails with another status
    """
    response = httpx.post(
        f"{backend_url}/api/find-pdf",
        json={"message": message, "username": username},
        timeout=30.0,
    )
    if response.status_code in (403, 500):
        error_body: dict[str, Any] = response.json()
        return error_body
    response.raise_for_status()
    result: dict[str, Any] = response.json()
    return result


def log_activity(backend_url: str, username: str, pdf_id: str, action: str) -> bool:
    """Send a view/download event.

    Never raises: logging an interaction must not break the chat.

    Returns:
        True if the backend accepted the event
    """
    try:
        response = httpx.post(
            f"{backend_url}/api/activity",
            json={"username": username, "pdf_id": pdf_id, "action": action},
            timeout=5.0,
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"Failed to log activity {action} for {pdf_id}: {e}")
        return False
    return True


def describe_pdf(pdf: dict[str, Any]) -> str:
    """One-line label: name, or subject with regulation and year."""
    if pdf.get("name"):
        return str(pdf["name"])

    label = str(pdf.get("subject", "PDF"))
    if pdf.get("regulation"):
        label += f" ({pdf['regulation']})"
    if pdf.get("year"):
        label += f" - {pdf['year']} Year"
    return label


def build_bot_messages(response: dict[str, Any]) -> list[dict[str, Any]]:
    """Turn a find-pdf response into chat messages.

    Rendering rules:
    - rejection or internal failure -> single error line
    - found with one document -> text + single card
    - found with many -> count line + suggestion list
    - not found with documents -> envelope message + suggestion list
    - nothing at all -> envelope message or a generic hint

    Returns:
        List of ``{"text": str, "pdf": dict | None, "suggestions": list}`` dicts
    """
    if response.get("ok") is False:
        # Rejected before resolution (e.g. login required)
        text = response.get("error") or "Please log in to access PDFs."
        return [{"text": text, "pdf": None, "suggestions": []}]

    if response.get("success") is False:
        error = response.get("error") or "unknown"
        return [{"text": f"Server error: {error}", "pdf": None, "suggestions": []}]

    documents: list[dict[str, Any]] = response.get("documents", [])

    if response.get("found"):
        if not documents:
            return [{"text": "No PDFs found for that request.", "pdf": None, "suggestions": []}]
        if len(documents) == 1:
            pdf = documents[0]
            return [
                {"text": f"Found: {describe_pdf(pdf)}", "pdf": None, "suggestions": []},
                {"text": "PDF available for download", "pdf": pdf, "suggestions": []},
            ]
        return [
            {
                "text": f"Found {len(documents)} PDFs for your request:",
                "pdf": None,
                "suggestions": documents,
            }
        ]

    message = response.get("message") or "No matches found. Try different keywords."
    return [{"text": message, "pdf": None, "suggestions": documents}]
