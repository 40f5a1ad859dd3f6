"""
Shared fixtures.

Stores and upstream services are never contacted: tests patch the
service-level names (get_db_session, execute_raw_sql, Mongo services,
requests.post) or hand in a fake language model client.
"""

from unittest.mock import MagicMock

import pytest

from placement_portal.schemas.schemas import CurrentUser, UserRole


@pytest.fixture
def student():
    return CurrentUser(user_id=7, email="asha@example.com", role=UserRole.student)


@pytest.fixture
def faculty():
    return CurrentUser(user_id=3, email="prof@example.com", role=UserRole.faculty)


@pytest.fixture
def fake_llm():
    """Language model client whose reply is set per test via fake_llm.complete.return_value."""
    client = MagicMock()
    client.complete.return_value = "{}"
    return client


@pytest.fixture
def sample_bundle():
    return {
        "profile": {
            "id": 1,
            "user_id": 7,
            "full_name": "Asha Rao",
            "email": "asha@example.com",
            "phone_number": "9876543210",
            "linkedin_profile": None,
            "github_portfolio": "github.com/asha",
        },
        "education": [{"id": 1, "institution_name": "NIT Trichy", "degree": "B.Tech", "start_date": "2021-08-01"}],
        "projects": [{"id": 2, "project_title": "Campus Connect", "technologies_used": ["React"]}],
        "skills": [{"id": 3, "category": "Languages", "skills": ["Python", "SQL"]}],
        "certifications": [],
        "achievements": [],
        "extracurricular": [],
        "hobbies": [{"id": 4, "hobby_name": "Chess", "description": None}],
    }
