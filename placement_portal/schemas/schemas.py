"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names follow the client contract: profile sections use the table
column names, function-style endpoints (resume, ATS, cover letter,
documents, code) use camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Any, Dict
import datetime as dt
from enum import Enum

from placement_portal.utils.form_values import split_list_input, to_storage_month


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    faculty = "faculty"
    admin = "admin"
    super_admin = "super_admin"


class SectionName(str, Enum):
    education = "education"
    projects = "projects"
    skills = "skills"
    certifications = "certifications"
    achievements = "achievements"
    extracurricular = "extracurricular"
    hobbies = "hobbies"


class AttendanceStatus(str, Enum):
    present = "present"
    absent = "absent"
    late = "late"


class ProblemDifficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class NotificationType(str, Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: UserRole = UserRole.student

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool


class CurrentUser(BaseModel):
    """Explicit session context handed to every service call."""
    user_id: int
    email: str
    role: UserRole = UserRole.student


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileForm(BaseModel):
    full_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = None
    linkedin_profile: Optional[str] = None
    github_portfolio: Optional[str] = None
    address_city: Optional[str] = None
    father_name: Optional[str] = None
    father_number: Optional[str] = None

class CompletenessResponse(BaseModel):
    completeness: int
    sections: Dict[str, bool]
    can_download_pdf: bool


# ============================================================
# SECTION FORMS (one per section editor)
# ============================================================

def _check_month(value):
    """Validates YYYY-MM inputs; storage normalization happens in the editor."""
    if value in (None, ""):
        return None
    to_storage_month(value)
    return value


class EducationForm(BaseModel):
    institution_name: str = Field(..., min_length=1)
    degree: str = Field(..., min_length=1)
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False
    cgpa_percentage: Optional[str] = None
    relevant_coursework: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def month_format(cls, value):
        return _check_month(value)


class ProjectForm(BaseModel):
    project_title: str = Field(..., min_length=1)
    duration_start: Optional[str] = None
    duration_end: Optional[str] = None
    description: Optional[str] = None
    technologies_used: List[str] = []
    role_contribution: Optional[str] = None
    github_demo_link: Optional[str] = None

    @field_validator("duration_start", "duration_end", mode="before")
    @classmethod
    def month_format(cls, value):
        return _check_month(value)

    @field_validator("technologies_used", mode="before")
    @classmethod
    def split_technologies(cls, value):
        return split_list_input(value)


class SkillForm(BaseModel):
    category: str = Field(..., min_length=1)
    skills: List[str] = Field(..., min_length=1)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, value):
        return split_list_input(value)


class CertificationForm(BaseModel):
    certification_name: str = Field(..., min_length=1)
    issuing_organization: str = Field(..., min_length=1)
    date_issued: Optional[str] = None
    credential_url: Optional[str] = None

    @field_validator("date_issued", mode="before")
    @classmethod
    def month_format(cls, value):
        return _check_month(value)


class AchievementForm(BaseModel):
    title: str = Field(..., min_length=1)
    issuing_body: Optional[str] = None
    achievement_date: Optional[str] = None
    description: Optional[str] = None

    @field_validator("achievement_date", mode="before")
    @classmethod
    def month_format(cls, value):
        return _check_month(value)


class ExtracurricularForm(BaseModel):
    activity_organization: str = Field(..., min_length=1)
    role: Optional[str] = None
    duration_start: Optional[str] = None
    duration_end: Optional[str] = None
    description: Optional[str] = None

    @field_validator("duration_start", "duration_end", mode="before")
    @classmethod
    def month_format(cls, value):
        return _check_month(value)


class HobbyForm(BaseModel):
    hobby_name: str = Field(..., min_length=1)
    description: Optional[str] = None


class HobbyEntry(BaseModel):
    """Bulk editor row; blank names are dropped on save."""
    hobby_name: str = ""
    description: Optional[str] = None

class HobbiesReplaceRequest(BaseModel):
    hobbies: List[HobbyEntry] = []


# ============================================================
# RESUME / AI SCHEMAS
# ============================================================

class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateResumeRequest(_CamelModel):
    target_role: Optional[str] = Field(None, alias="targetRole")
    job_description: Optional[str] = Field(None, alias="jobDescription")

class ATSAnalysisRequest(_CamelModel):
    resume_text: Optional[str] = Field(None, alias="resumeText")
    job_description: Optional[str] = Field(None, alias="jobDescription")

class CoverLetterRequest(_CamelModel):
    company_name: Optional[str] = Field(None, alias="companyName")
    position: Optional[str] = None
    why_interested: Optional[str] = Field(None, alias="whyInterested")
    job_description: Optional[str] = Field(None, alias="jobDescription")

class RenderResumeRequest(_CamelModel):
    resume_content: Dict[str, Any] = Field(..., alias="resumeContent")
    profile: Optional[Dict[str, Any]] = None
    target_role: Optional[str] = Field(None, alias="targetRole")

class ParseDocumentRequest(_CamelModel):
    file_path: Optional[str] = Field(None, alias="filePath")
    bucket: Optional[str] = None

class CodeExecutionRequest(BaseModel):
    code: str
    language: str
    stdin: Optional[str] = ""


# ============================================================
# ATTENDANCE SCHEMAS
# ============================================================

class AttendanceRecord(BaseModel):
    student_id: int
    status: AttendanceStatus = AttendanceStatus.present

class AttendanceMarkRequest(BaseModel):
    subject: str = Field(..., min_length=1)
    date: dt.date
    records: List[AttendanceRecord] = Field(..., min_length=1)


# ============================================================
# MANAGEMENT SCHEMAS (faculty / admin / super admin screens)
# ============================================================

class QuizForm(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    subject: Optional[str] = None
    duration_minutes: int = Field(30, gt=0)
    total_marks: int = Field(100, gt=0)

class CodingProblemForm(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    difficulty: ProblemDifficulty = ProblemDifficulty.easy
    constraints: Optional[str] = None
    tags: List[str] = []
    is_placement: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return split_list_input(value)

class NotificationForm(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationType = NotificationType.info

class CollegeForm(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


# ============================================================
# NAVIGATION SCHEMAS
# ============================================================

class NavigationItem(BaseModel):
    label: str
    path: str
    icon: str

class NavigationResponse(BaseModel):
    role: str
    items: List[NavigationItem]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
