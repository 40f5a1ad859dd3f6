"""
Resume Generation Service - profile sections -> enhanced resume content.

PURPOSE:
1. Fetch the profile and all seven sections (concurrently)
2. Ask the language model for ATS-optimized resume content
3. Parse the JSON reply (fenced or bare); fall back to the raw rows
4. Store a resume version and log a "generate" event

Only a missing profile stops generation. Empty projects or skills are
sent as empty lists.
"""

import json
import logging
from typing import Optional

from placement_portal.core.errors import ProfileNotFoundError
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.llm_client import LLMClient, get_llm_client, parse_or_fallback
from placement_portal.services.mongo_service import ResumeVersionService, ResumeAnalyticsService
from placement_portal.services.profile_service import fetch_student_bundle, BUNDLE_SECTIONS

logger = logging.getLogger(__name__)

FALLBACK_ATS_SCORE = 75
FALLBACK_RECOMMENDATIONS = ["Complete profile review recommended"]


def build_system_prompt(target_role: Optional[str] = None) -> str:
    focus = target_role or "the student's field"
    return f"""You are an expert resume writer and ATS optimization specialist.
Your task is to create an ATS-friendly resume in a structured format that can be easily converted to PDF.

CRITICAL INSTRUCTIONS FOR PROJECTS:
1. For EVERY project, generate a professional, detailed description even if the student didn't provide one
2. Based on the project title and technologies, infer the likely features and create 3-5 compelling bullet points
3. Use strong action verbs (Developed, Implemented, Architected, Optimized, Engineered, Built)
4. Add quantifiable metrics where logical
5. Highlight technical skills and technologies used
6. Keep descriptions professional while remaining truthful to the project scope
7. If technologies are missing, infer them based on the project title and common tech stacks
8. Format each project with:
   - project_title: Keep original
   - description: 2-3 sentence compelling overview
   - technologies_used: Array of relevant technologies
   - contributions: Array of 3-5 bullet points describing what was built/achieved
   - duration_start and duration_end: Keep original
   - github_demo_link: Keep original

Focus on:
- Clear, concise bullet points with action verbs
- Keywords relevant to {focus}
- ATS-compatible structure

Return ONLY a valid JSON object with the following structure:
{{
  "summary": "Professional summary paragraph",
  "formattedEducation": [enhanced education entries],
  "formattedProjects": [
    {{
      "project_title": "original title",
      "description": "compelling 2-3 sentence overview",
      "technologies_used": ["tech1", "tech2"],
      "contributions": ["bullet point 1", "bullet point 2"],
      "duration_start": "original date",
      "duration_end": "original date",
      "github_demo_link": "original link"
    }}
  ],
  "formattedSkills": {{"Category": ["skill1", "skill2"]}},
  "formattedCertifications": [formatted certifications],
  "formattedAchievements": [formatted achievements],
  "formattedExtracurricular": [formatted activities],
  "formattedHobbies": [hobbies as strings - only include if provided],
  "atsScore": estimated ATS score (0-100),
  "recommendations": [list of improvement suggestions]
}}"""


def build_user_prompt(bundle: dict, target_role: Optional[str] = None, job_description: Optional[str] = None) -> str:
    tailored = f" tailored for {target_role} role" if target_role else ""
    prompt = f"Create an ATS-optimized resume{tailored} using this data:\n\n{json.dumps(bundle, indent=2, default=str)}"
    if job_description:
        prompt += f"\n\nTarget job description:\n{job_description}"
    return prompt


def fallback_content(raw_text: str, bundle: dict) -> dict:
    """Resume content built from the untouched rows when the reply is not JSON."""
    return {
        "summary": raw_text,
        "formattedEducation": bundle.get("education", []),
        "formattedProjects": bundle.get("projects", []),
        "formattedSkills": bundle.get("skills", []),
        "formattedCertifications": bundle.get("certifications", []),
        "formattedAchievements": bundle.get("achievements", []),
        "formattedExtracurricular": bundle.get("extracurricular", []),
        "formattedHobbies": bundle.get("hobbies", []),
        "atsScore": FALLBACK_ATS_SCORE,
        "recommendations": list(FALLBACK_RECOMMENDATIONS),
    }


class ResumeGenerationService:
    """
    Complete generation workflow for one caller.
    """

    def __init__(self, ai_client: LLMClient = None):
        self.ai_client = ai_client or get_llm_client()
        self.versions = ResumeVersionService()
        self.analytics = ResumeAnalyticsService()

    def generate(
        self,
        user: CurrentUser,
        target_role: Optional[str] = None,
        job_description: Optional[str] = None,
    ) -> dict:
        """
        Returns:
            {
                "success": True,
                "resumeContent": {...},
                "resumeId": "...",
                "profile": {...},
                "degraded": False
            }
        """
        target_role = (target_role or "").strip() or None
        bundle = fetch_student_bundle(user)

        profile = bundle["profile"]
        if not profile:
            raise ProfileNotFoundError()

        payload = {"profile": profile}
        payload.update({name: bundle[name] for name in BUNDLE_SECTIONS})

        logger.info("Generating resume for user %s (target role: %s)", user.user_id, target_role)
        reply = self.ai_client.complete(
            build_system_prompt(target_role),
            build_user_prompt(payload, target_role, job_description),
        )

        content, degraded = parse_or_fallback(reply, lambda raw: fallback_content(raw, bundle))

        resume_id = self.versions.insert(
            user_id=user.user_id,
            content=content,
            target_role=target_role,
            ats_score=content.get("atsScore") or None,
            degraded=degraded,
        )
        self.analytics.log(
            user.user_id,
            "generate",
            {"targetRole": target_role, "atsScore": content.get("atsScore")},
        )

        return {
            "success": True,
            "resumeContent": content,
            "resumeId": resume_id,
            "profile": profile,
            "degraded": degraded,
        }
