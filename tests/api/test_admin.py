# tests/api/test_admin.py
import pytest
from httpx import AsyncClient
from fastapi import status

from eduresolve.main import app
from eduresolve.services.ai_service import ComplaintAnalyzer, get_analyzer

COMPLAINTS = [
    {"subject": "Leaky Roof", "description": "Water everywhere", "category": "Hostel", "priority": "High Priority"},
    {"subject": "Exam clash", "description": "Two papers at 9am", "category": "Academic", "priority": "Urgent"},
    {"subject": "Rude librarian", "description": "Shouted at us", "category": "Staff", "priority": "Low Priority"},
]


@pytest.fixture
async def filed(client: AsyncClient, student_headers: dict) -> list[dict]:
    created = []
    for body in COMPLAINTS:
        response = await client.post("/api/v1/complaints/", json=body, headers=student_headers)
        assert response.status_code == status.HTTP_201_CREATED
        created.append(response.json())
    return created


@pytest.mark.asyncio
async def test_students_cannot_use_admin_endpoints(client: AsyncClient, student_headers: dict):
    for path in ("/api/v1/admin/complaints", "/api/v1/admin/users", "/api/v1/admin/stats"):
        response = await client.get(path, headers=student_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_list_all_complaints_newest_first(client: AsyncClient, filed: list, admin_headers: dict):
    response = await client.get("/api/v1/admin/complaints", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [c["subject"] for c in data] == ["Rude librarian", "Exam clash", "Leaky Roof"]
    assert all(c["studentName"] == "Alice" for c in data)


@pytest.mark.asyncio
async def test_search_and_filters(client: AsyncClient, filed: list, admin_headers: dict):
    by_subject = await client.get("/api/v1/admin/complaints?search=ROOF", headers=admin_headers)
    assert [c["subject"] for c in by_subject.json()] == ["Leaky Roof"]

    by_student = await client.get("/api/v1/admin/complaints?search=alice", headers=admin_headers)
    assert len(by_student.json()) == 3

    by_category = await client.get("/api/v1/admin/complaints?category=Academic", headers=admin_headers)
    assert [c["subject"] for c in by_category.json()] == ["Exam clash"]

    none_resolved = await client.get("/api/v1/admin/complaints?status=Resolved", headers=admin_headers)
    assert none_resolved.json() == []

    page = await client.get("/api/v1/admin/complaints?skip=1&limit=1", headers=admin_headers)
    assert [c["subject"] for c in page.json()] == ["Exam clash"]


@pytest.mark.asyncio
async def test_review_complaint(client: AsyncClient, filed: list, admin_headers: dict):
    target = filed[0]
    response = await client.patch(
        f"/api/v1/admin/complaints/{target['id']}",
        json={"status": "In Progress", "remarks": "Plumber booked", "reviewNotes": "Block C", "isVerified": True},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "In Progress"
    assert data["reviewNotes"] == "Block C"
    assert data["isVerified"] is True
    assert data["updatedAt"]
    assert data["createdAt"] == target["createdAt"]
    assert data["category"] == "Hostel"

    others = await client.get("/api/v1/admin/complaints?status=Submitted", headers=admin_headers)
    assert {c["id"] for c in others.json()} == {filed[1]["id"], filed[2]["id"]}


@pytest.mark.asyncio
async def test_status_only_review_keeps_remarks(client: AsyncClient, filed: list, admin_headers: dict):
    path = f"/api/v1/admin/complaints/{filed[0]['id']}"
    await client.patch(
        path,
        json={"status": "In Progress", "remarks": "Fixed soon", "reviewNotes": "n", "isVerified": True},
        headers=admin_headers,
    )

    response = await client.patch(path, json={"status": "Resolved"}, headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "Resolved"
    assert (data["remarks"], data["reviewNotes"], data["isVerified"]) == ("Fixed soon", "n", True)


@pytest.mark.asyncio
async def test_review_unknown_complaint(client: AsyncClient, admin_headers: dict):
    response = await client.patch(
        "/api/v1/admin/complaints/C-MISSING",
        json={"status": "Closed"},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_code"] == "complaint_not_found"


@pytest.mark.asyncio
async def test_get_single_complaint(client: AsyncClient, filed: list, admin_headers: dict):
    response = await client.get(f"/api/v1/admin/complaints/{filed[1]['id']}", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["subject"] == "Exam clash"


@pytest.mark.asyncio
async def test_ai_draft_fills_remarks_and_notes(client: AsyncClient, filed: list, admin_headers: dict):
    response = await client.post(
        f"/api/v1/admin/complaints/{filed[0]['id']}/ai-draft",
        json={"status": "In Review", "remarks": "", "reviewNotes": "", "isVerified": False},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["suggestionAvailable"] is True
    assert data["insight"]["suggestedAction"] == "Send maintenance today"
    assert data["draft"]["remarks"] == (
        "Based on initial review: Roof leaks into room 12. Action: Send maintenance today"
    )
    assert data["draft"]["reviewNotes"] == "AI Suggestion (Empathetic): Send maintenance today"
    assert data["draft"]["status"] == "In Review"

    # nothing is saved until the review is sent
    stored = await client.get(f"/api/v1/admin/complaints/{filed[0]['id']}", headers=admin_headers)
    assert stored.json()["remarks"] == ""


@pytest.mark.asyncio
async def test_ai_failure_leaves_the_draft_untouched(
    client: AsyncClient, filed: list, admin_headers: dict, failing_analyzer: ComplaintAnalyzer
):
    app.dependency_overrides[get_analyzer] = lambda: failing_analyzer
    draft = {"status": "In Progress", "remarks": "Typed by hand", "reviewNotes": "My notes", "isVerified": True}

    response = await client.post(
        f"/api/v1/admin/complaints/{filed[0]['id']}/ai-draft", json=draft, headers=admin_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["suggestionAvailable"] is False
    assert data["insight"] is None
    assert data["draft"] == draft


@pytest.mark.asyncio
async def test_admin_stats(client: AsyncClient, filed: list, admin_headers: dict):
    await client.patch(
        f"/api/v1/admin/complaints/{filed[1]['id']}", json={"status": "Resolved"}, headers=admin_headers
    )

    response = await client.get("/api/v1/admin/stats", headers=admin_headers)

    assert response.json() == {
        "total": 3,
        "pendingAction": 2,
        "inProgress": 0,
        "resolved": 1,
        "byCategory": {"Hostel": 1, "Academic": 1, "Staff": 1},
    }


@pytest.mark.asyncio
async def test_list_users_hides_password_hashes(client: AsyncClient, student_headers: dict, admin_headers: dict):
    response = await client.get("/api/v1/admin/users", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    users = response.json()
    assert {u["email"] for u in users} == {"admin@university.com", "alice@uni.edu"}
    assert all(set(u) == {"id", "name", "email", "role"} for u in users)
