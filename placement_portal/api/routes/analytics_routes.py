"""
Analytics Routes (read-only, computed per request)

GET /analytics/dashboard - Student dashboard figures
GET /analytics/resume - Resume action counts, ATS scores and trend
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_user
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.analytics_service import resume_analytics, student_dashboard

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/dashboard")
def dashboard(user: CurrentUser = Depends(get_current_user)):
    return student_dashboard(user)


@router.get("/resume")
def resume_stats(user: CurrentUser = Depends(get_current_user)):
    return resume_analytics(user)
