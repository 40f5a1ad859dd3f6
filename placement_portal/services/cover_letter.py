"""
Cover letter drafting from the caller's profile and a target position.

Context sent to the model: the first 2 education rows, the first 3
projects and every skill row.
"""

import json
import logging
from typing import Optional

from placement_portal.core.errors import ProfileNotFoundError, RequestValidationFailed
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.llm_client import LLMClient, get_llm_client, parse_or_fallback
from placement_portal.services.mongo_service import ResumeAnalyticsService
from placement_portal.services.profile_service import get_profile
from placement_portal.services.sections import SECTIONS, SectionService

logger = logging.getLogger(__name__)

MAX_TOKENS = 1024
TEMPERATURE = 0.7

SYSTEM_PROMPT = """You are a professional cover letter writer. Create compelling, personalized cover letters that:
- Are concise (3-4 paragraphs, ~300 words)
- Show genuine interest in the company
- Highlight relevant skills and experiences
- Include a strong call to action
- Use a professional yet personable tone

Return ONLY a valid JSON object with:
{
  "coverLetter": "The complete cover letter text with proper formatting",
  "subject": "Suggested email subject line",
  "highlights": ["Key points emphasized in the letter"]
}"""


def build_user_prompt(
    profile: dict,
    education: list,
    projects: list,
    skills: list,
    company_name: str,
    position: str,
    why_interested: Optional[str] = None,
    job_description: Optional[str] = None,
) -> str:
    lines = [
        "Write a cover letter for:",
        f"Company: {company_name}",
        f"Position: {position}",
        f"Why interested: {why_interested or ''}",
    ]
    if job_description:
        lines.append(f"Job Description: {job_description}")
    lines += [
        "",
        "Applicant Profile:",
        f"Name: {profile.get('full_name') or ''}",
        f"Email: {profile.get('email') or ''}",
        f"Education: {json.dumps(education, default=str)}",
        f"Recent Projects: {json.dumps(projects, default=str)}",
        f"Skills: {json.dumps(skills, default=str)}",
    ]
    return "\n".join(lines)


class CoverLetterService:

    def __init__(self, ai_client: LLMClient = None):
        self.ai_client = ai_client or get_llm_client()
        self.analytics = ResumeAnalyticsService()

    def generate(
        self,
        user: CurrentUser,
        company_name: Optional[str],
        position: Optional[str],
        why_interested: Optional[str] = None,
        job_description: Optional[str] = None,
    ) -> dict:
        if not company_name or not position:
            raise RequestValidationFailed("Company name and position are required")

        profile = get_profile(user)
        if not profile:
            raise ProfileNotFoundError()

        education = SectionService(SECTIONS["education"]).list_rows(user, limit=2)
        projects = SectionService(SECTIONS["projects"]).list_rows(user, limit=3)
        skills = SectionService(SECTIONS["skills"]).list_rows(user)

        reply = self.ai_client.complete(
            SYSTEM_PROMPT,
            build_user_prompt(
                profile, education, projects, skills,
                company_name, position, why_interested, job_description
            ),
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )

        def fallback(raw_text: str) -> dict:
            return {
                "coverLetter": raw_text,
                "subject": f"Application for {position} at {company_name}",
                "highlights": ["Generated cover letter"],
            }

        result, degraded = parse_or_fallback(reply, fallback)
        self.analytics.log(
            user.user_id, "cover_letter", {"companyName": company_name, "position": position}
        )

        return {"success": True, **result, "degraded": degraded}
