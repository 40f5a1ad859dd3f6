"""
Document Service - per-user file storage and stored-document parsing.

Files live in a GridFS bucket under "<user_id>/resume-<epoch_ms>-<filename>".
A stored document is consumed once: after its text is extracted the file
is removed from the bucket.

Stored-document parsing:
- .txt  decoded locally
- .pdf  sent to a PDF-to-text conversion API (pdf.co compatible)
- .doc / .docx and anything else rejected

This path is separate from the direct-upload extractor in
utils/file_upload.py, which parses PDF/DOCX locally.
"""

import base64
import logging
import time
from typing import Optional

import requests
from gridfs import GridFSBucket
from gridfs.errors import NoFile

from placement_portal.core.config import get_settings
from placement_portal.core.errors import DocumentExtractionError, ServiceNotConfiguredError
from placement_portal.db.mongodb import get_bucket
from placement_portal.schemas.schemas import CurrentUser
from placement_portal.services.mongo_service import ResumeAnalyticsService

logger = logging.getLogger(__name__)

PDF_PARSE_FAILED = "Unable to parse PDF. Please copy the text and use the text area instead."
WORD_NOT_SUPPORTED = "DOC/DOCX parsing not yet supported. Please convert to PDF or paste the text directly."
UNSUPPORTED_FORMAT = "Unsupported file format"


def build_storage_path(user_id: int, filename: str, now_ms: Optional[int] = None) -> str:
    """<user_id>/resume-<epoch_ms>-<filename>"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    safe_name = filename.replace("/", "_").replace("\\", "_")
    return f"{user_id}/resume-{now_ms}-{safe_name}"


def owns_path(user: CurrentUser, path: str) -> bool:
    return bool(path) and path.startswith(f"{user.user_id}/") and ".." not in path


class DocumentStorageService:
    """Upload, download and delete files in the configured bucket."""

    def __init__(self, bucket_name: Optional[str] = None):
        self.settings = get_settings()
        self.bucket_name = bucket_name or self.settings.resume_bucket
        self.bucket: GridFSBucket = get_bucket(self.bucket_name)

    def upload(self, user: CurrentUser, filename: str, content: bytes, content_type: str = None) -> dict:
        path = build_storage_path(user.user_id, filename)
        file_id = self.bucket.upload_from_stream(
            path, content, metadata={"user_id": user.user_id, "content_type": content_type}
        )
        logger.info("Stored %s (%d bytes) in bucket %s", path, len(content), self.bucket_name)
        return {"path": path, "bucket": self.bucket_name, "file_id": str(file_id), "size": len(content)}

    def download(self, path: str) -> bytes:
        stream = self.bucket.open_download_stream_by_name(path)
        try:
            return stream.read()
        finally:
            stream.close()

    def delete(self, path: str) -> int:
        """Remove every revision stored under the path; returns the count removed."""
        removed = 0
        for grid_out in self.bucket.find({"filename": path}):
            self.bucket.delete(grid_out._id)
            removed += 1
        return removed


class DocumentParsingService:
    """
    Parse a previously stored document and delete it on success.

    Every failure is a DocumentExtractionError, rendered as
    {"success": false, "error": ...} with HTTP 400.
    """

    def __init__(self, storage: DocumentStorageService = None):
        self.settings = get_settings()
        self.storage = storage
        self.analytics = ResumeAnalyticsService()

    def parse(self, user: CurrentUser, file_path: Optional[str], bucket: Optional[str]) -> dict:
        if not file_path or not bucket:
            raise DocumentExtractionError("Missing filePath or bucket parameter")
        if bucket != self.settings.resume_bucket:
            raise DocumentExtractionError(f"Unknown bucket '{bucket}'")
        if not owns_path(user, file_path):
            raise DocumentExtractionError("You can only parse your own files")

        storage = self.storage or DocumentStorageService(bucket)
        logger.info("Parsing document %s from bucket %s", file_path, bucket)

        try:
            content = storage.download(file_path)
        except NoFile:
            raise DocumentExtractionError(f"Failed to download file: {file_path} not found")

        extension = file_path.rsplit(".", 1)[-1].lower() if "." in file_path else ""
        if extension == "txt":
            text = self._decode_text(content)
        elif extension == "pdf":
            text = self.convert_pdf(content)
        elif extension in ("doc", "docx"):
            raise DocumentExtractionError(WORD_NOT_SUPPORTED)
        else:
            raise DocumentExtractionError(UNSUPPORTED_FORMAT)

        storage.delete(file_path)
        self.analytics.log(user.user_id, "parse_document", {"filePath": file_path, "length": len(text)})
        logger.info("Extracted %d characters from %s", len(text), file_path)

        return {"success": True, "text": text, "length": len(text)}

    @staticmethod
    def _decode_text(content: bytes) -> str:
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            return content.decode("latin-1")

    def convert_pdf(self, content: bytes) -> str:
        """Send the PDF inline (base64) to the conversion API and return its text body."""
        if not self.settings.pdfco_api_key:
            raise ServiceNotConfiguredError("PDFCO_API_KEY")

        try:
            response = requests.post(
                f"{self.settings.pdfco_base_url}/pdf/convert/to/text",
                headers={"x-api-key": self.settings.pdfco_api_key},
                json={"file": base64.b64encode(content).decode("ascii"), "inline": True},
                timeout=self.settings.http_timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("PDF conversion request failed: %s", e)
            raise DocumentExtractionError(PDF_PARSE_FAILED)

        if not response.ok:
            logger.error("PDF conversion error: %s %s", response.status_code, response.text)
            raise DocumentExtractionError(PDF_PARSE_FAILED)

        try:
            body = response.json()
        except ValueError:
            raise DocumentExtractionError(PDF_PARSE_FAILED)
        if body.get("error"):
            logger.error("PDF conversion reported an error: %s", body.get("message"))
            raise DocumentExtractionError(PDF_PARSE_FAILED)

        return body.get("body") or ""
