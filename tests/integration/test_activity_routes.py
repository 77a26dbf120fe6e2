"""Integration tests for activity logging and admin reporting endpoints."""

import asyncio

from backend.app.models.documents import NewPdfDocument
from tests.conftest import PortalFixture

ADMIN = {"Authorization": "Bearer admin"}


def _add_pdf(portal: PortalFixture, subject: str = "Physics") -> str:
    doc = asyncio.run(
        portal.catalog.add_document(
            NewPdfDocument(
                subject=subject,
                regulation="R23",
                year="1",
                pdf_url=f"http://testserver/pdfs/R23/1/{subject}/{subject}.pdf",
            )
        )
    )
    return str(doc.pdf_id)


def _log(portal: PortalFixture, username: str, pdf_id: str, action: str) -> int:
    response = portal.client.post(
        "/api/activity", json={"username": username, "pdf_id": pdf_id, "action": action}
    )
    return response.status_code


def test_log_activity_copies_user_details(portal: PortalFixture) -> None:
    pdf_id = _add_pdf(portal)

    response = portal.client.post(
        "/api/activity", json={"username": "bob", "pdf_id": pdf_id, "action": "download"}
    )

    assert response.status_code == 200
    assert response.json()["ok"] is True
    records = asyncio.run(portal.activities.list_activity())
    assert len(records) == 1
    assert records[0].branch == "CSE"
    assert records[0].year == "2"
    assert records[0].action.value == "download"


def test_log_activity_validation(portal: PortalFixture) -> None:
    pdf_id = _add_pdf(portal)

    missing = portal.client.post("/api/activity", json={"username": "alice", "pdf_id": pdf_id})

    assert missing.status_code == 400
    assert missing.json()["error"] == "Missing fields"
    assert _log(portal, "alice", "not-a-uuid", "view") == 400
    assert _log(portal, "alice", pdf_id, "share") == 400
    assert _log(portal, "ghost", pdf_id, "view") == 404


def test_students_with_activity_defaults_to_admin_branch(portal: PortalFixture) -> None:
    pdf_id = _add_pdf(portal)
    _log(portal, "alice", pdf_id, "view")
    _log(portal, "alice", pdf_id, "download")
    _log(portal, "erin", pdf_id, "view")

    response = portal.client.get("/api/students-with-activity", headers=ADMIN)

    assert response.status_code == 200
    data = response.json()
    assert data["branch"] == "CSE"
    students = {s["username"]: s for s in data["students"]}
    assert set(students) == {"alice", "bob"}
    assert students["alice"]["views"] == 1
    assert students["alice"]["downloads"] == 1
    assert len(students["alice"]["recent"]) == 2
    assert students["bob"]["last_active"] is None
    assert data["students"][0]["username"] == "alice"


def test_students_with_activity_other_branch(portal: PortalFixture) -> None:
    pdf_id = _add_pdf(portal)
    _log(portal, "erin", pdf_id, "view")

    response = portal.client.get("/api/students-with-activity?branch=ECE", headers=ADMIN)

    students = response.json()["students"]
    assert [s["username"] for s in students] == ["erin"]
    assert students[0]["views"] == 1


def test_students_with_activity_requires_admin(portal: PortalFixture) -> None:
    response = portal.client.get(
        "/api/students-with-activity", headers={"Authorization": "Bearer alice"}
    )

    assert response.status_code == 403


def test_activity_summary(portal: PortalFixture) -> None:
    physics = _add_pdf(portal, "Physics")
    maths = _add_pdf(portal, "Maths")
    _log(portal, "alice", physics, "view")
    _log(portal, "bob", physics, "download")
    _log(portal, "alice", maths, "view")

    response = portal.client.get("/api/activity-summary", headers=ADMIN)

    summary = response.json()["summary"]
    assert summary["branch"] == "CSE"
    assert summary["total_views"] == 2
    assert summary["total_downloads"] == 1
    assert summary["active_students"] == 2
    assert summary["top_documents"][0]["pdf_id"] == physics
    assert summary["top_documents"][0]["subject"] == "Physics"
    assert summary["top_documents"][0]["count"] == 2
