"""
Attendance Routes

POST /attendance/mark - Faculty/admin: mark a session (upsert per student/subject/date)
GET  /attendance/roster - Faculty/admin: students to mark
GET  /attendance/me - Own records and summary
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_user, require_roles
from placement_portal.schemas.schemas import AttendanceMarkRequest, CurrentUser, MessageResponse, UserRole
from placement_portal.services.attendance_service import mark_attendance, my_attendance
from placement_portal.services.management_service import student_roster

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/mark", response_model=MessageResponse)
async def mark(
    request: AttendanceMarkRequest,
    user: CurrentUser = Depends(require_roles(UserRole.faculty, UserRole.admin, UserRole.super_admin))
):
    count = mark_attendance(user, request)
    return MessageResponse(message=f"Attendance saved for {count} students")


@router.get("/roster")
async def roster(
    user: CurrentUser = Depends(require_roles(UserRole.faculty, UserRole.admin, UserRole.super_admin))
):
    return student_roster()


@router.get("/me")
async def my_records(user: CurrentUser = Depends(get_current_user)):
    return my_attendance(user)
