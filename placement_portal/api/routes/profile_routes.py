"""
Profile Routes

GET /profile - Own profile (null when not created yet)
PUT /profile - Create or update own profile
GET /profile/completeness - Completeness percentage and PDF gate
"""

from typing import Optional

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_user
from placement_portal.schemas.schemas import CompletenessResponse, CurrentUser, ProfileForm
from placement_portal.services.profile_service import get_profile, save_profile, get_completeness

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("")
async def read_profile(user: CurrentUser = Depends(get_current_user)) -> Optional[dict]:
    return get_profile(user)


@router.put("")
async def upsert_profile(form: ProfileForm, user: CurrentUser = Depends(get_current_user)):
    profile = save_profile(user, form)
    return {"message": "Profile saved successfully", "success": True, "profile": profile}


@router.get("/completeness", response_model=CompletenessResponse)
def completeness(user: CurrentUser = Depends(get_current_user)):
    return get_completeness(user)
