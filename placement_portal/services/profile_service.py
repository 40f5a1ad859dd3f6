"""
Profile Service - the student profile row, completeness, and the
full section bundle used by the AI generators.

Completeness counts four required sections (personal info, education,
projects, skills). Each is worth 25%; there is no partial credit.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional
import logging

from sqlalchemy import text

from placement_portal.db.postgres import get_db_session, execute_raw_sql, row_to_dict
from placement_portal.schemas.schemas import CurrentUser, ProfileForm
from placement_portal.services.sections import SECTIONS, SectionService

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = list(ProfileForm.model_fields.keys())

REQUIRED_SECTIONS = ("personal_info", "education", "projects", "skills")

# Order of the generator payload
BUNDLE_SECTIONS = (
    "education", "projects", "skills", "certifications",
    "achievements", "extracurricular", "hobbies",
)


# ============================================================
# PROFILE ROW
# ============================================================

def get_profile(user: CurrentUser) -> Optional[dict]:
    """Fetch the caller's profile row, or None."""
    rows = execute_raw_sql(
        f"SELECT id, user_id, {', '.join(PROFILE_COLUMNS)} FROM student_profiles WHERE user_id = :user_id",
        {"user_id": user.user_id}
    )
    return rows[0] if rows else None


def save_profile(user: CurrentUser, form: ProfileForm) -> dict:
    """Upsert the caller's profile (one row per user)."""
    values = form.model_dump()
    columns = ", ".join(PROFILE_COLUMNS)
    placeholders = ", ".join(f":{col}" for col in PROFILE_COLUMNS)
    updates = ", ".join(f"{col} = EXCLUDED.{col}" for col in PROFILE_COLUMNS)

    with get_db_session() as db:
        result = db.execute(
            text(f"""
                INSERT INTO student_profiles (user_id, {columns})
                VALUES (:user_id, {placeholders})
                ON CONFLICT (user_id) DO UPDATE SET {updates}, updated_at = CURRENT_TIMESTAMP
                RETURNING id, user_id, {columns}
            """),
            {**values, "user_id": user.user_id}
        )
        return row_to_dict(list(result.keys()), result.fetchone())


# ============================================================
# COMPLETENESS
# ============================================================

def section_status(
    profile: Optional[dict],
    education: List[dict],
    projects: List[dict],
    skills: List[dict],
) -> Dict[str, bool]:
    """Which required sections are complete."""
    profile = profile or {}
    return {
        "personal_info": bool(
            profile.get("full_name") and profile.get("email") and profile.get("phone_number")
        ),
        "education": len(education) > 0,
        "projects": len(projects) > 0,
        "skills": len(skills) > 0,
    }


def compute_completeness(
    profile: Optional[dict],
    education: List[dict],
    projects: List[dict],
    skills: List[dict],
) -> int:
    """round(100 * completed / 4) -> one of 0, 25, 50, 75, 100."""
    status = section_status(profile, education, projects, skills)
    completed = sum(1 for name in REQUIRED_SECTIONS if status[name])
    return round(100 * completed / len(REQUIRED_SECTIONS))


def get_completeness(user: CurrentUser) -> dict:
    bundle = fetch_student_bundle(user)
    status = section_status(bundle["profile"], bundle["education"], bundle["projects"], bundle["skills"])
    completeness = compute_completeness(
        bundle["profile"], bundle["education"], bundle["projects"], bundle["skills"]
    )
    return {
        "completeness": completeness,
        "sections": status,
        "can_download_pdf": completeness == 100,
    }


# ============================================================
# SECTION BUNDLE
# ============================================================

def fetch_student_bundle(user: CurrentUser) -> dict:
    """
    Fetch the profile and all seven sections concurrently.

    Each query runs in its own session; the first failure is re-raised
    and aborts the whole fetch.
    """
    with ThreadPoolExecutor(max_workers=len(BUNDLE_SECTIONS) + 1) as pool:
        profile_future = pool.submit(get_profile, user)
        section_futures = {
            name: pool.submit(SectionService(SECTIONS[name]).list_rows, user)
            for name in BUNDLE_SECTIONS
        }

        bundle = {"profile": profile_future.result()}
        for name, future in section_futures.items():
            bundle[name] = future.result() or []

    return bundle
