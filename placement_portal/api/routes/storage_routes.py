"""
Document Storage Routes

POST   /documents/upload  - Store a file under <user_id>/ in the resume bucket
POST   /documents/parse   - Extract text from a stored file (file is then deleted)
DELETE /documents         - Delete one of your stored files
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from placement_portal.core.auth import get_current_user
from placement_portal.schemas.schemas import CurrentUser, MessageResponse, ParseDocumentRequest
from placement_portal.services.document_service import (
    DocumentParsingService, DocumentStorageService, owns_path
)
from placement_portal.utils.file_upload import check_size

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post("/upload", status_code=201)
async def upload_document(file: UploadFile = File(...), user: CurrentUser = Depends(get_current_user)):
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    content = await file.read()
    check_size(content)
    return DocumentStorageService().upload(user, file.filename, content, file.content_type)


@router.post("/parse")
def parse_document(request: ParseDocumentRequest, user: CurrentUser = Depends(get_current_user)):
    """Returns {success, text, length}; failures are {success: false, error} with 400."""
    return DocumentParsingService().parse(user, request.file_path, request.bucket)


@router.delete("", response_model=MessageResponse)
def delete_document(path: str, user: CurrentUser = Depends(get_current_user)):
    if not owns_path(user, path):
        raise HTTPException(status_code=403, detail="You can only delete your own files")
    if DocumentStorageService().delete(path) == 0:
        raise HTTPException(status_code=404, detail="File not found")
    return MessageResponse(message="File deleted successfully")
