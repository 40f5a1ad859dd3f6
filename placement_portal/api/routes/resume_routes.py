"""
Resume Routes

POST /resume/generate             - AI resume content from the profile sections
GET  /resume/versions             - Own resume versions (latest first)
GET  /resume/versions/{id}        - One version with its content
GET  /resume/versions/{id}/pdf    - Download a stored version as PDF
POST /resume/pdf                  - Download posted resume content as PDF
POST /resume/ats                  - ATS analysis of resume text
POST /resume/extract-text         - Upload a PDF/DOCX/TXT and get its text
POST /resume/cover-letter         - AI cover letter
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from placement_portal.core.auth import get_current_user
from placement_portal.core.errors import RequestValidationFailed
from placement_portal.schemas.schemas import (
    ATSAnalysisRequest, CoverLetterRequest, CurrentUser, ErrorResponse, GenerateResumeRequest,
    RenderResumeRequest
)
from placement_portal.services.ats_analyzer import ATSAnalysisService
from placement_portal.services.cover_letter import CoverLetterService
from placement_portal.services.mongo_service import ResumeVersionService
from placement_portal.services.pdf_renderer import render_resume_pdf, resume_filename
from placement_portal.services.profile_service import get_completeness, get_profile
from placement_portal.services.resume_generator import ResumeGenerationService
from placement_portal.services.resume_normalizer import normalize_resume_content
from placement_portal.utils.file_upload import extract_text_from_file, get_supported_formats

# Domain errors render as {error, details}
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}

router = APIRouter(prefix="/resume", tags=["Resume"])

PDF_LOCKED_MESSAGE = "Complete your profile (100%) to download the resume PDF"


@router.post("/generate", responses=ERROR_RESPONSES)
def generate_resume(request: GenerateResumeRequest, user: CurrentUser = Depends(get_current_user)):
    """
    Generate resume content with AI.

    Returns {success, resumeContent, resumeId, profile, degraded}.
    degraded is true when the AI reply could not be parsed and the raw
    section rows were used instead.
    """
    return ResumeGenerationService().generate(user, request.target_role, request.job_description)


@router.get("/versions")
def list_versions(limit: int = 20, user: CurrentUser = Depends(get_current_user)):
    return ResumeVersionService().list_for_user(user.user_id, limit=limit)


@router.get("/versions/{version_id}")
def get_version(version_id: str, user: CurrentUser = Depends(get_current_user)):
    version = ResumeVersionService().get_for_user(user.user_id, version_id)
    if not version:
        raise HTTPException(status_code=404, detail="Resume version not found")
    return version


def _pdf_response(user: CurrentUser, content: dict, profile: Optional[dict], target_role: Optional[str]) -> Response:
    if not get_completeness(user)["can_download_pdf"]:
        raise RequestValidationFailed(PDF_LOCKED_MESSAGE)

    profile = profile or get_profile(user) or {}
    resume = normalize_resume_content(content, profile)
    filename = resume_filename(resume.profile.full_name, target_role)

    return Response(
        content=render_resume_pdf(resume),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/versions/{version_id}/pdf", responses=ERROR_RESPONSES)
def download_version_pdf(version_id: str, user: CurrentUser = Depends(get_current_user)):
    version = ResumeVersionService().get_for_user(user.user_id, version_id)
    if not version:
        raise HTTPException(status_code=404, detail="Resume version not found")
    return _pdf_response(user, version.get("metadata") or {}, None, version.get("target_role"))


@router.post("/pdf", responses=ERROR_RESPONSES)
def download_pdf(request: RenderResumeRequest, user: CurrentUser = Depends(get_current_user)):
    return _pdf_response(user, request.resume_content, request.profile, request.target_role)


@router.post("/ats", responses=ERROR_RESPONSES)
def analyze_ats(request: ATSAnalysisRequest, user: CurrentUser = Depends(get_current_user)):
    return ATSAnalysisService().analyze(user, request.resume_text, request.job_description)


@router.post("/extract-text")
async def extract_text(file: UploadFile = File(...), user: CurrentUser = Depends(get_current_user)):
    """
    Extract text from a resume file for the ATS flow.

    Supported: PDF, DOCX, TXT (max size from MAX_UPLOAD_SIZE_MB).
    """
    text, filename = await extract_text_from_file(file)
    return {"success": True, "text": text, "length": len(text), "filename": filename}


@router.get("/formats")
async def supported_formats():
    return get_supported_formats()


@router.post("/cover-letter", responses=ERROR_RESPONSES)
def generate_cover_letter(request: CoverLetterRequest, user: CurrentUser = Depends(get_current_user)):
    return CoverLetterService().generate(
        user,
        request.company_name,
        request.position,
        request.why_interested,
        request.job_description,
    )
