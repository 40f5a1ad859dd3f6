"""
Admin Routes - notifications

GET   /admin/notifications - All notifications, newest first
POST  /admin/notifications - Send a notification
PATCH /admin/notifications/{id}/toggle - Flip is_active
"""

from fastapi import APIRouter, Depends, HTTPException

from placement_portal.core.auth import require_roles
from placement_portal.schemas.schemas import CurrentUser, NotificationForm, UserRole
from placement_portal.services import management_service

router = APIRouter(prefix="/admin", tags=["Admin"])

admins = require_roles(UserRole.admin, UserRole.super_admin)


@router.get("/notifications")
async def list_notifications(user: CurrentUser = Depends(admins)):
    return management_service.list_notifications()


@router.post("/notifications", status_code=201)
async def send_notification(form: NotificationForm, user: CurrentUser = Depends(admins)):
    notification = management_service.create_notification(user, form)
    return {"message": "Notification sent successfully", "success": True, "notification": notification}


@router.patch("/notifications/{notification_id}/toggle")
async def toggle_notification(notification_id: int, user: CurrentUser = Depends(admins)):
    notification = management_service.toggle_notification(notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification
