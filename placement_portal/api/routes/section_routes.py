"""
Profile Section Routes (education, projects, skills, certifications,
achievements, extracurricular, hobbies)

GET    /sections/{section}               - List own rows (display_order)
POST   /sections/{section}               - Add a row
GET    /sections/{section}/{id}/edit     - Row as edit-form values (YYYY-MM months)
PUT    /sections/{section}/{id}          - Update a row
DELETE /sections/{section}/{id}          - Delete a row
PUT    /sections/hobbies                 - Replace every hobby at once

Mutations return a message only; clients refetch the list.
"""

from typing import List

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from placement_portal.core.auth import get_current_user
from placement_portal.schemas.schemas import (
    CurrentUser, HobbiesReplaceRequest, MessageResponse, SectionName
)
from placement_portal.services.sections import SectionService, get_section_service, replace_hobbies

router = APIRouter(prefix="/sections", tags=["Profile Sections"])


def _validated(service: SectionService, payload: dict) -> dict:
    """Validate the body against the section's form model (422 on failure)."""
    try:
        form = service.spec.form.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))
    return form.model_dump()


@router.put("/hobbies")
async def replace_all_hobbies(request: HobbiesReplaceRequest, user: CurrentUser = Depends(get_current_user)):
    rows = replace_hobbies(user, request.hobbies)
    return {"message": "Hobbies saved successfully", "success": True, "count": len(rows)}


@router.get("/{section}")
async def list_section(section: SectionName, user: CurrentUser = Depends(get_current_user)) -> List[dict]:
    return get_section_service(section.value).list_rows(user)


@router.post("/{section}", status_code=201)
async def add_section_row(
    section: SectionName,
    payload: dict = Body(...),
    user: CurrentUser = Depends(get_current_user)
):
    service = get_section_service(section.value)
    row = service.create(user, _validated(service, payload))
    return {"message": f"{service.spec.label} added successfully", "success": True, "id": row.get("id")}


@router.get("/{section}/{row_id}/edit")
async def edit_section_row(section: SectionName, row_id: int, user: CurrentUser = Depends(get_current_user)):
    return get_section_service(section.value).edit_form(user, row_id)


@router.put("/{section}/{row_id}", response_model=MessageResponse)
async def update_section_row(
    section: SectionName,
    row_id: int,
    payload: dict = Body(...),
    user: CurrentUser = Depends(get_current_user)
):
    service = get_section_service(section.value)
    service.update(user, row_id, _validated(service, payload))
    return MessageResponse(message=f"{service.spec.label} updated successfully")


@router.delete("/{section}/{row_id}", response_model=MessageResponse)
async def delete_section_row(section: SectionName, row_id: int, user: CurrentUser = Depends(get_current_user)):
    service = get_section_service(section.value)
    service.delete(user, row_id)
    return MessageResponse(message=f"{service.spec.label} deleted successfully")
