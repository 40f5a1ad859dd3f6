"""
Resume content normalization.

Generated resume JSON is loosely shaped: the model may answer with
"institution" instead of "institution_name", "title" instead of
"project_title", skills as a dict or as rows, and so on. Everything is
converted here, once, into canonical records. The PDF renderer only ever
sees the canonical form.

Resolution rule: the first candidate key holding a non-empty value wins.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from placement_portal.utils.form_values import split_list_input


# ============================================================
# CANONICAL RECORDS
# ============================================================

class CanonicalProfile(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    linkedin_profile: Optional[str] = None
    github_portfolio: Optional[str] = None


class CanonicalEducation(BaseModel):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    is_current: bool = False
    score: Optional[str] = None


class CanonicalProject(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = []
    contributions: List[str] = []
    start: Optional[str] = None
    end: Optional[str] = None
    link: Optional[str] = None


class CanonicalSkillGroup(BaseModel):
    category: str
    skills: List[str] = []


class CanonicalCertification(BaseModel):
    name: Optional[str] = None
    issuer: Optional[str] = None
    issued: Optional[str] = None


class CanonicalAchievement(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class CanonicalActivity(BaseModel):
    organization: Optional[str] = None
    role: Optional[str] = None
    description: Optional[str] = None


class CanonicalResume(BaseModel):
    profile: CanonicalProfile = CanonicalProfile()
    summary: Optional[str] = None
    education: List[CanonicalEducation] = []
    skills: List[CanonicalSkillGroup] = []
    projects: List[CanonicalProject] = []
    certifications: List[CanonicalCertification] = []
    achievements: List[CanonicalAchievement] = []
    extracurricular: List[CanonicalActivity] = []
    hobbies: List[str] = []


# ============================================================
# FIELD RESOLUTION
# ============================================================

EDUCATION_KEYS = {
    "institution": ("institution_name", "institution", "school", "university", "college"),
    "degree": ("degree", "degree_title", "title"),
    "field_of_study": ("field_of_study", "major", "specialization"),
    "start": ("start_date", "start", "startDate"),
    "end": ("end_date", "end", "endDate"),
    "score": ("cgpa_percentage", "cgpa", "gpa", "score"),
}
CURRENT_FLAG_KEYS = ("is_current", "current")

PROJECT_KEYS = {
    "title": ("project_title", "title", "name"),
    "description": ("description", "summary"),
    "start": ("duration_start", "start_date", "start"),
    "end": ("duration_end", "end_date", "end"),
    "link": ("github_demo_link", "link", "url"),
}

CERTIFICATION_KEYS = {
    "name": ("certification_name", "name", "title"),
    "issuer": ("issuing_organization", "issuer", "organization"),
    "issued": ("issue_date", "date_issued", "date"),
}

ACHIEVEMENT_KEYS = {
    "title": ("achievement_title", "title", "name"),
    "description": ("description",),
}

ACTIVITY_KEYS = {
    "organization": ("activity_organization", "activity_name", "organization", "name"),
    "role": ("role", "position"),
    "description": ("description",),
}

HOBBY_KEYS = ("hobby_name", "name", "title")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def first_present(record: Dict[str, Any], keys: Iterable[str]) -> Any:
    """Value of the first key whose value is present, else None."""
    for key in keys:
        value = record.get(key)
        if _is_present(value):
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if not _is_present(value):
        return None
    return str(value).strip()


def _resolve(record: Dict[str, Any], key_map: Dict[str, tuple]) -> Dict[str, Optional[str]]:
    return {field: _as_text(first_present(record, keys)) for field, keys in key_map.items()}


def infer_current(record: Dict[str, Any], end_value: Any = None) -> bool:
    """
    An explicit true flag wins; otherwise an end date mentioning
    "present" (any case) marks the entry as ongoing.
    """
    for key in CURRENT_FLAG_KEYS:
        if record.get(key) is True:
            return True
    return isinstance(end_value, str) and "present" in end_value.lower()


def _records(value: Any) -> List[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return []


def _text_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if _is_present(item)]
    if _is_present(value):
        return [str(value).strip()]
    return []


# ============================================================
# SECTION NORMALIZERS
# ============================================================

def normalize_education(value: Any) -> List[CanonicalEducation]:
    out = []
    for record in _records(value):
        fields = _resolve(record, EDUCATION_KEYS)
        fields["is_current"] = infer_current(record, fields["end"])
        if any(v for k, v in fields.items() if k != "is_current"):
            out.append(CanonicalEducation(**fields))
    return out


def normalize_projects(value: Any) -> List[CanonicalProject]:
    out = []
    for record in _records(value):
        fields = _resolve(record, PROJECT_KEYS)
        fields["technologies"] = split_list_input(
            first_present(record, ("technologies_used", "technologies", "tech_stack"))
        )
        fields["contributions"] = _text_list(
            first_present(record, ("contributions", "role_contribution", "highlights"))
        )
        if fields["title"] or fields["description"]:
            out.append(CanonicalProject(**fields))
    return out


def normalize_skills(value: Any) -> List[CanonicalSkillGroup]:
    """
    Accepts {"Category": [..] or "a, b"} or rows [{"category", "skills"}].
    Categories without skills are dropped.
    """
    groups = []
    if isinstance(value, dict):
        items = list(value.items())
    else:
        items = [
            (record.get("category") or "Skills", record.get("skills"))
            for record in _records(value)
        ]

    for category, skills in items:
        if isinstance(skills, str):
            names = split_list_input(skills)
        else:
            names = _text_list(skills)
        if names:
            groups.append(CanonicalSkillGroup(category=str(category), skills=names))
    return groups


def normalize_certifications(value: Any) -> List[CanonicalCertification]:
    out = []
    for record in _records(value):
        fields = _resolve(record, CERTIFICATION_KEYS)
        if fields["name"]:
            out.append(CanonicalCertification(**fields))
    return out


def normalize_achievements(value: Any) -> List[CanonicalAchievement]:
    out = []
    for record in _records(value):
        fields = _resolve(record, ACHIEVEMENT_KEYS)
        if fields["title"] or fields["description"]:
            out.append(CanonicalAchievement(**fields))
    return out


def normalize_extracurricular(value: Any) -> List[CanonicalActivity]:
    out = []
    for record in _records(value):
        fields = _resolve(record, ACTIVITY_KEYS)
        if fields["organization"] or fields["description"]:
            out.append(CanonicalActivity(**fields))
    return out


def normalize_hobbies(value: Any) -> List[str]:
    if not isinstance(value, list):
        value = [value] if value else []
    names = []
    for hobby in value:
        if isinstance(hobby, dict):
            hobby = first_present(hobby, HOBBY_KEYS)
        text = _as_text(hobby)
        if text:
            names.append(text)
    return names


def normalize_profile(profile: Optional[Dict[str, Any]]) -> CanonicalProfile:
    profile = profile or {}
    return CanonicalProfile(
        full_name=_as_text(first_present(profile, ("full_name", "name"))),
        email=_as_text(profile.get("email")),
        phone_number=_as_text(first_present(profile, ("phone_number", "phone"))),
        linkedin_profile=_as_text(first_present(profile, ("linkedin_profile", "linkedin"))),
        github_portfolio=_as_text(first_present(profile, ("github_portfolio", "github"))),
    )


def normalize_resume_content(content: Dict[str, Any], profile: Optional[Dict[str, Any]] = None) -> CanonicalResume:
    """Generated resume JSON (+ profile row) -> CanonicalResume."""
    content = content or {}
    return CanonicalResume(
        profile=normalize_profile(profile),
        summary=_as_text(content.get("summary")),
        education=normalize_education(content.get("formattedEducation")),
        skills=normalize_skills(content.get("formattedSkills")),
        projects=normalize_projects(content.get("formattedProjects")),
        certifications=normalize_certifications(content.get("formattedCertifications")),
        achievements=normalize_achievements(content.get("formattedAchievements")),
        extracurricular=normalize_extracurricular(content.get("formattedExtracurricular")),
        hobbies=normalize_hobbies(content.get("formattedHobbies")),
    )
