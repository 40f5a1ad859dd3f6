"""
Super Admin Routes - colleges

GET    /superadmin/colleges
POST   /superadmin/colleges - Add a college (duplicate code is a 400)
DELETE /superadmin/colleges/{id}
"""

from fastapi import APIRouter, Depends, HTTPException

from placement_portal.core.auth import require_roles
from placement_portal.schemas.schemas import CollegeForm, CurrentUser, ErrorResponse, MessageResponse, UserRole
from placement_portal.services import management_service

router = APIRouter(prefix="/superadmin", tags=["Super Admin"])

super_admin = require_roles(UserRole.super_admin)


@router.get("/colleges")
async def list_colleges(user: CurrentUser = Depends(super_admin)):
    return management_service.list_colleges()


@router.post("/colleges", status_code=201, responses={400: {"model": ErrorResponse}})
async def add_college(form: CollegeForm, user: CurrentUser = Depends(super_admin)):
    college = management_service.create_college(form)
    return {"message": "College added successfully", "success": True, "college": college}


@router.delete("/colleges/{college_id}", response_model=MessageResponse)
async def delete_college(college_id: int, user: CurrentUser = Depends(super_admin)):
    if not management_service.delete_college(college_id):
        raise HTTPException(status_code=404, detail="College not found")
    return MessageResponse(message="College deleted successfully")
