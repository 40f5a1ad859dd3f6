"""
Coding Practice Routes

POST /coding/execute - Run code on the judge and return its raw result
GET  /coding/languages - Supported languages
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_user
from placement_portal.schemas.schemas import CodeExecutionRequest, CurrentUser, ErrorResponse
from placement_portal.services.code_execution import LANGUAGE_IDS, execute_code

router = APIRouter(prefix="/coding", tags=["Coding Practice"])


@router.post(
    "/execute",
    responses={code: {"model": ErrorResponse} for code in (400, 500, 502)},
)
def execute(request: CodeExecutionRequest, user: CurrentUser = Depends(get_current_user)):
    return execute_code(request.code, request.language, request.stdin)


@router.get("/languages")
async def languages():
    return {"languages": sorted(LANGUAGE_IDS)}
