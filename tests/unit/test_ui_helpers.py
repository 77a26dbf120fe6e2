"""Unit tests for UI helper functions."""

from unittest.mock import MagicMock, patch

import httpx

from ui.helpers import build_bot_messages, describe_pdf, get_auth_header, log_activity

PHYSICS = {
    "pdf_id": "11111111-1111-1111-1111-111111111111",
    "subject": "Physics",
    "regulation": "R23",
    "year": "1",
    "pdf_url": "http://localhost:8000/pdfs/R23/1/Physics/physics.pdf",
    "name": None,
}
MATHS = {**PHYSICS, "subject": "Maths", "name": "Maths Unit 1"}


def test_get_auth_header() -> None:
    assert get_auth_header("admin") == {"Authorization": "Bearer admin"}


def test_describe_pdf_prefers_name() -> None:
    assert describe_pdf(MATHS) == "Maths Unit 1"


def test_describe_pdf_falls_back_to_taxonomy() -> None:
    assert describe_pdf(PHYSICS) == "Physics (R23) - 1 Year"
    assert describe_pdf({"subject": "Quantum"}) == "Quantum"


def test_build_bot_messages_rejection() -> None:
    messages = build_bot_messages({"ok": False, "error": "Please log in to access PDFs."})

    assert messages == [{"text": "Please log in to access PDFs.", "pdf": None, "suggestions": []}]


def test_build_bot_messages_internal_failure() -> None:
    messages = build_bot_messages({"success": False, "error": "internal error"})

    assert messages[0]["text"] == "Server error: internal error"


def test_build_bot_messages_single_match_shows_card() -> None:
    messages = build_bot_messages({"success": True, "found": True, "documents": [PHYSICS]})

    assert len(messages) == 2
    assert messages[0]["text"] == "Found: Physics (R23) - 1 Year"
    assert messages[1]["pdf"] == PHYSICS


def test_build_bot_messages_many_matches_lists_suggestions() -> None:
    messages = build_bot_messages(
        {"success": True, "found": True, "documents": [PHYSICS, MATHS]}
    )

    assert len(messages) == 1
    assert messages[0]["text"] == "Found 2 PDFs for your request:"
    assert messages[0]["suggestions"] == [PHYSICS, MATHS]


def test_build_bot_messages_found_without_documents() -> None:
    messages = build_bot_messages({"success": True, "found": True, "documents": []})

    assert messages[0]["text"] == "No PDFs found for that request."


def test_build_bot_messages_fallback_uses_hint() -> None:
    messages = build_bot_messages(
        {
            "success": True,
            "found": False,
            "message": "found for subject Maths",
            "documents": [MATHS],
        }
    )

    assert messages == [
        {"text": "found for subject Maths", "pdf": None, "suggestions": [MATHS]}
    ]


def test_build_bot_messages_nothing_at_all() -> None:
    messages = build_bot_messages({"success": True, "found": False, "documents": []})

    assert messages[0]["text"] == "No matches found. Try different keywords."


@patch("ui.helpers.httpx.post")
def test_log_activity_success(mock_post: MagicMock) -> None:
    mock_post.return_value = MagicMock()

    assert log_activity("http://backend", "alice", PHYSICS["pdf_id"], "view") is True
    assert mock_post.call_args.kwargs["json"] == {
        "username": "alice",
        "pdf_id": PHYSICS["pdf_id"],
        "action": "view",
    }


@patch("ui.helpers.httpx.post")
def test_log_activity_swallows_http_errors(mock_post: MagicMock) -> None:
    mock_post.side_effect = httpx.ConnectError("refused")

    assert log_activity("http://backend", "alice", PHYSICS["pdf_id"], "download") is False
