"""
Resume PDF Renderer - canonical resume records -> single A4 page.

Section order:
    header (name, contact, links), PROFESSIONAL SUMMARY, EDUCATION, SKILLS,
    PROJECTS, CERTIFICATIONS, ACHIEVEMENTS, EXTRACURRICULAR ACTIVITIES,
    HOBBIES & INTERESTS

Empty sections and absent values are skipped. Long content simply flows;
there is no pagination logic.
"""

import re
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from placement_portal.services.resume_normalizer import CanonicalResume

PAGE_PADDING = 40


def _styles() -> dict:
    base = ParagraphStyle("Base", fontName="Helvetica", fontSize=11, leading=14)
    return {
        "name": ParagraphStyle(
            "Name", parent=base, fontName="Helvetica-Bold", fontSize=24, leading=28,
            alignment=TA_CENTER, spaceAfter=5,
        ),
        "contact": ParagraphStyle(
            "Contact", parent=base, fontSize=9, leading=12, textColor=colors.HexColor("#555555"),
            alignment=TA_CENTER, spaceAfter=2,
        ),
        "section_title": ParagraphStyle(
            "SectionTitle", parent=base, fontName="Helvetica-Bold", fontSize=14, leading=17,
            spaceBefore=15, spaceAfter=3,
        ),
        "text": ParagraphStyle("Text", parent=base, fontSize=10, leading=15, spaceAfter=5),
        "title": ParagraphStyle(
            "Title", parent=base, fontName="Helvetica-Bold", fontSize=11, leading=14, spaceAfter=2,
        ),
        "subtitle": ParagraphStyle(
            "Subtitle", parent=base, fontSize=10, leading=13, textColor=colors.HexColor("#555555"),
            spaceAfter=2,
        ),
        "date": ParagraphStyle(
            "Date", parent=base, fontName="Helvetica-Oblique", fontSize=9, leading=12,
            textColor=colors.HexColor("#666666"),
        ),
        "bullet": ParagraphStyle(
            "Bullet", parent=base, fontSize=10, leading=13, leftIndent=10, spaceAfter=2,
        ),
    }


def _p(value: Optional[str]) -> str:
    return escape(value or "")


def _date_range(start: Optional[str], end: Optional[str]) -> Optional[str]:
    if not start and not end:
        return None
    return f"{start or ''} - {end or ''}".strip()


def _rule() -> HRFlowable:
    return HRFlowable(width="100%", thickness=1, color=colors.black, spaceBefore=0, spaceAfter=8)


def build_story(resume: CanonicalResume) -> list:
    """Flowables for the whole resume, in template order."""
    s = _styles()
    story = []
    profile = resume.profile

    def section(title: str):
        story.append(Paragraph(_p(title), s["section_title"]))
        story.append(_rule())

    # Header
    story.append(Paragraph(_p(profile.full_name), s["name"]))
    contact = " | ".join(v for v in (profile.email, profile.phone_number) if v)
    if contact:
        story.append(Paragraph(_p(contact), s["contact"]))
    links = []
    if profile.linkedin_profile:
        links.append(f"LinkedIn: {profile.linkedin_profile}")
    if profile.github_portfolio:
        links.append(f"GitHub: {profile.github_portfolio}")
    if links:
        story.append(Paragraph(_p(" | ".join(links)), s["contact"]))
    story.append(Spacer(1, 10))
    story.append(_rule())

    if resume.summary:
        section("PROFESSIONAL SUMMARY")
        story.append(Paragraph(_p(resume.summary), s["text"]))

    if resume.education:
        section("EDUCATION")
        for edu in resume.education:
            story.append(Paragraph(_p(edu.degree or edu.institution), s["title"]))
            subtitle = edu.institution or edu.field_of_study
            if subtitle:
                story.append(Paragraph(_p(subtitle), s["subtitle"]))
            dates = _date_range(edu.start, "Present" if edu.is_current else edu.end)
            if dates:
                story.append(Paragraph(_p(dates), s["date"]))
            if edu.score:
                story.append(Paragraph(_p(f"CGPA: {edu.score}"), s["text"]))
            story.append(Spacer(1, 10))

    if resume.skills:
        section("SKILLS")
        for group in resume.skills:
            story.append(Paragraph(
                f"<b>{_p(group.category.upper())}:</b> {_p(', '.join(group.skills))}", s["text"]
            ))

    if resume.projects:
        section("PROJECTS")
        for project in resume.projects:
            if project.title:
                story.append(Paragraph(_p(project.title), s["title"]))
            if project.description:
                story.append(Paragraph(_p(project.description), s["text"]))
            if project.technologies:
                story.append(Paragraph(
                    _p("Technologies: " + ", ".join(project.technologies)), s["subtitle"]
                ))
            for contribution in project.contributions:
                story.append(Paragraph(_p(f"• {contribution}"), s["bullet"]))
            if project.start and project.end:
                story.append(Paragraph(_p(f"{project.start} - {project.end}"), s["date"]))
            story.append(Spacer(1, 10))

    if resume.certifications:
        section("CERTIFICATIONS")
        for cert in resume.certifications:
            line = cert.name
            if cert.issuer:
                line += f" - {cert.issuer}"
            if cert.issued:
                line += f" ({cert.issued})"
            story.append(Paragraph(_p(f"• {line}"), s["bullet"]))

    if resume.achievements:
        section("ACHIEVEMENTS")
        for achievement in resume.achievements:
            line = ": ".join(v for v in (achievement.title, achievement.description) if v)
            story.append(Paragraph(_p(f"• {line}"), s["bullet"]))

    if resume.extracurricular:
        section("EXTRACURRICULAR ACTIVITIES")
        for activity in resume.extracurricular:
            heading = activity.organization or ""
            if activity.role:
                heading = f"{heading} - {activity.role}" if heading else activity.role
            if heading:
                story.append(Paragraph(_p(heading), s["title"]))
            if activity.description:
                story.append(Paragraph(_p(activity.description), s["text"]))
            story.append(Spacer(1, 10))

    if resume.hobbies:
        section("HOBBIES & INTERESTS")
        story.append(Paragraph(_p(" • ".join(resume.hobbies)), s["text"]))

    return story


def render_resume_pdf(resume: CanonicalResume) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_PADDING,
        rightMargin=PAGE_PADDING,
        topMargin=PAGE_PADDING,
        bottomMargin=PAGE_PADDING,
        title=f"{resume.profile.full_name or 'Resume'} Resume",
    )
    doc.build(build_story(resume))
    pdf = buffer.getvalue()
    buffer.close()
    return pdf


def _filename_part(value: str) -> str:
    return re.sub(r"\s+", "_", value.strip())


def resume_filename(full_name: Optional[str], target_role: Optional[str] = None) -> str:
    """'Jane Doe' -> Jane_Doe_Resume.pdf; with a role -> Jane_Doe_Data_Analyst_Resume.pdf"""
    parts: List[str] = [_filename_part(full_name or "") or "Student"]
    if target_role and target_role.strip():
        parts.append(_filename_part(target_role))
    parts.append("Resume")
    return "_".join(parts) + ".pdf"
