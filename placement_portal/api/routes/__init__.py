"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_portal.api.routes.auth_routes import router as auth_router
from placement_portal.api.routes.profile_routes import router as profile_router
from placement_portal.api.routes.section_routes import router as section_router
from placement_portal.api.routes.resume_routes import router as resume_router
from placement_portal.api.routes.storage_routes import router as storage_router
from placement_portal.api.routes.coding_routes import router as coding_router
from placement_portal.api.routes.navigation_routes import router as navigation_router
from placement_portal.api.routes.analytics_routes import router as analytics_router
from placement_portal.api.routes.attendance_routes import router as attendance_router
from placement_portal.api.routes.faculty_routes import router as faculty_router
from placement_portal.api.routes.admin_routes import router as admin_router
from placement_portal.api.routes.superadmin_routes import router as superadmin_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(section_router)
api_router.include_router(resume_router)
api_router.include_router(storage_router)
api_router.include_router(coding_router)
api_router.include_router(navigation_router)
api_router.include_router(analytics_router)
api_router.include_router(attendance_router)
api_router.include_router(faculty_router)
api_router.include_router(admin_router)
api_router.include_router(superadmin_router)
