"""
HTTP-level tests: error rendering, auth gates and route wiring.

Authentication is replaced with dependency overrides; services are
patched where the routes import them.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from placement_portal.api.routes import coding_routes, resume_routes, storage_routes
from placement_portal.core.auth import get_current_user, get_optional_user
from placement_portal.core.config import Settings
from placement_portal.core.errors import DocumentExtractionError, ProfileNotFoundError
from placement_portal.main import app
from placement_portal.services import code_execution
from placement_portal.services.sections import SectionRowNotFound, SectionService


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def as_user(client):
    def login(user):
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_optional_user] = lambda: user
        return client
    return login


def test_health_root(client):
    assert client.get("/").json()["status"] == "healthy"


def test_protected_route_without_token(client):
    response = client.get("/api/analytics/dashboard")
    assert response.status_code == 401


# ============================================================
# NAVIGATION
# ============================================================

def test_navigation_redirects_anonymous_callers(client):
    response = client.get("/api/navigation")
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized", "redirect": "/login"}


def test_navigation_for_faculty(as_user, faculty):
    response = as_user(faculty).get("/api/navigation")
    body = response.json()
    assert response.status_code == 200
    assert body["role"] == "faculty"
    assert len(body["items"]) == 4


# ============================================================
# ERROR RENDERING
# ============================================================

def test_generate_without_profile(as_user, student):
    with patch.object(resume_routes, "ResumeGenerationService") as service:
        service.return_value.generate.side_effect = ProfileNotFoundError()
        response = as_user(student).post("/api/resume/generate", json={"targetRole": "SDE"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "Profile not found. Please complete your profile first.",
        "details": "ProfileNotFoundError: Profile not found. Please complete your profile first.",
    }
    service.return_value.generate.assert_called_once_with(student, "SDE", None)


def test_unsupported_language(as_user, student):
    with patch.object(code_execution, "get_settings", return_value=Settings(judge0_api_key="rk")):
        response = as_user(student).post("/api/coding/execute", json={"code": "x", "language": "cobol"})

    assert response.status_code == 400
    assert response.json()["error"] == "Unsupported language"


def test_languages(client):
    assert client.get("/api/coding/languages").json() == {"languages": sorted(coding_routes.LANGUAGE_IDS)}


def test_parse_failure_shape(as_user, student):
    with patch.object(storage_routes, "DocumentParsingService") as service:
        service.return_value.parse.side_effect = DocumentExtractionError("Unsupported file format")
        response = as_user(student).post(
            "/api/documents/parse", json={"filePath": "7/resume-1-cv.rtf", "bucket": "resumes"}
        )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Unsupported file format"}


def test_delete_foreign_document(as_user, student):
    response = as_user(student).delete("/api/documents", params={"path": "8/resume-1-cv.pdf"})
    assert response.status_code == 403


# ============================================================
# SECTIONS
# ============================================================

def test_section_validation(as_user, student):
    response = as_user(student).post("/api/sections/education", json={"degree": "B.Tech"})
    assert response.status_code == 422


@pytest.mark.parametrize("month", ["2024-13", "2024-00", "2024-05xyz"])
def test_section_rejects_invalid_month(as_user, student, month):
    with patch.object(SectionService, "create") as create:
        response = as_user(student).post(
            "/api/sections/education",
            json={"institution_name": "NIT", "degree": "B.Tech", "start_date": month},
        )
    assert response.status_code == 422
    create.assert_not_called()


def test_unknown_section(as_user, student):
    assert as_user(student).get("/api/sections/internships").status_code == 422


def test_update_missing_row(as_user, student):
    with patch.object(SectionService, "update", side_effect=SectionRowNotFound("Education 5 not found")):
        response = as_user(student).put(
            "/api/sections/education/5", json={"institution_name": "NIT", "degree": "B.Tech"}
        )
    assert response.status_code == 404
    assert response.json() == {"detail": "Education 5 not found"}


# ============================================================
# RESUME PDF AND EXTRACTION
# ============================================================

PDF_BODY = {
    "resumeContent": {"summary": "Backend engineer", "formattedHobbies": ["Chess"]},
    "profile": {"full_name": "Asha Rao", "email": "asha@example.com"},
    "targetRole": "Data Analyst",
}


def test_pdf_locked_until_profile_complete(as_user, student):
    with patch.object(resume_routes, "get_completeness", return_value={"can_download_pdf": False}):
        response = as_user(student).post("/api/resume/pdf", json=PDF_BODY)

    assert response.status_code == 400
    assert response.json()["error"] == resume_routes.PDF_LOCKED_MESSAGE


def test_pdf_download(as_user, student):
    with patch.object(resume_routes, "get_completeness", return_value={"can_download_pdf": True}):
        response = as_user(student).post("/api/resume/pdf", json=PDF_BODY)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="Asha_Rao_Data_Analyst_Resume.pdf"'
    assert response.content.startswith(b"%PDF")


def test_extract_text_upload(as_user, student):
    response = as_user(student).post(
        "/api/resume/extract-text",
        files={"file": ("resume.txt", b"Asha Rao\nPython, SQL", "text/plain")},
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True, "text": "Asha Rao\nPython, SQL", "length": 20, "filename": "resume.txt"
    }


def test_extract_text_rejects_doc(as_user, student):
    response = as_user(student).post(
        "/api/resume/extract-text",
        files={"file": ("resume.doc", b"\xd0\xcf\x11\xe0", "application/msword")},
    )
    assert response.status_code == 400


def test_openapi_documents_error_shape(client):
    schema = client.get("/openapi.json").json()
    ats = schema["paths"]["/api/resume/ats"]["post"]["responses"]
    assert ats["502"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert set(schema["components"]["schemas"]["ErrorResponse"]["properties"]) == {"error", "details"}
