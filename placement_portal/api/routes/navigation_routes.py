"""
Navigation Routes

GET /navigation - Menu for the caller's role
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from placement_portal.core.auth import get_optional_user
from placement_portal.schemas.schemas import CurrentUser, NavigationResponse
from placement_portal.services.navigation import LOGIN_PATH, menu_for_role

router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get("", response_model=NavigationResponse)
async def navigation(user: Optional[CurrentUser] = Depends(get_optional_user)):
    """Unauthenticated callers get 401 with a redirect to the login screen."""
    if user is None:
        return JSONResponse(status_code=401, content={"detail": "Unauthorized", "redirect": LOGIN_PATH})
    return NavigationResponse(role=user.role.value, items=menu_for_role(user.role))
