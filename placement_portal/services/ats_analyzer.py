"""
ATS Analyzer - scores resume text against a fixed six-category rubric.

Rubric (points, total 100):
    format 20, keywords 25, experience 20, skills 15, contact 10, readability 10

A reply that is not JSON yields a fixed fallback analysis flagged as degraded.
"""

import logging
from typing import Optional

from placement_portal.core.errors import RequestValidationFailed
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.llm_client import LLMClient, get_llm_client, parse_or_fallback
from placement_portal.services.mongo_service import ResumeAnalyticsService

logger = logging.getLogger(__name__)

RUBRIC = {
    "format": 20,
    "keywords": 25,
    "experience": 20,
    "skills": 15,
    "contact": 10,
    "readability": 10,
}

FALLBACK_CATEGORY_SCORES = {
    "format": 15,
    "keywords": 18,
    "experience": 15,
    "skills": 12,
    "contact": 8,
    "readability": 7,
}

TEMPERATURE = 0.7
MAX_TOKENS = 1536


def build_system_prompt(job_description: Optional[str] = None) -> str:
    comparison = f"Compare against this job description:\n{job_description}\n\n" if job_description else ""
    return f"""You are an ATS (Applicant Tracking System) analyzer expert.
Analyze resumes for ATS compatibility and provide detailed scoring and recommendations.

Evaluate the resume on these criteria:
1. Format & Structure ({RUBRIC['format']} points)
2. Keyword Optimization ({RUBRIC['keywords']} points)
3. Experience & Achievements ({RUBRIC['experience']} points)
4. Skills & Certifications ({RUBRIC['skills']} points)
5. Contact Information ({RUBRIC['contact']} points)
6. Readability & Clarity ({RUBRIC['readability']} points)

{comparison}Return ONLY a valid JSON object with:
{{
  "overallScore": number (0-100),
  "categoryScores": {{
    "format": number,
    "keywords": number,
    "experience": number,
    "skills": number,
    "contact": number,
    "readability": number
  }},
  "strengths": [list of strong points],
  "improvements": [list of specific improvements with priorities],
  "missingKeywords": [important keywords not found],
  "recommendations": [actionable suggestions]
}}"""


def fallback_analysis(raw_text: str) -> dict:
    return {
        "overallScore": 70,
        "categoryScores": dict(FALLBACK_CATEGORY_SCORES),
        "strengths": ["Analysis in progress"],
        "improvements": ["Unable to parse detailed analysis"],
        "missingKeywords": [],
        "recommendations": [raw_text],
    }


class ATSAnalysisService:

    def __init__(self, ai_client: LLMClient = None):
        self.ai_client = ai_client or get_llm_client()
        self.analytics = ResumeAnalyticsService()

    def analyze(self, user: CurrentUser, resume_text: Optional[str], job_description: Optional[str] = None) -> dict:
        if not resume_text or not resume_text.strip():
            raise RequestValidationFailed("Resume text is required")

        reply = self.ai_client.complete(
            build_system_prompt(job_description),
            f"Analyze this resume for ATS compatibility:\n\n{resume_text}",
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )

        analysis, degraded = parse_or_fallback(reply, fallback_analysis)
        self.analytics.log(user.user_id, "ats_check", {"score": analysis.get("overallScore")})

        return {"success": True, "analysis": analysis, "degraded": degraded}
