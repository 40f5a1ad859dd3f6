"""
Tests for both text extractors: direct upload and stored documents.
"""

import asyncio
import io
from unittest.mock import MagicMock, patch

import pytest
from docx import Document
from fastapi import HTTPException

from placement_portal.core.config import Settings
from placement_portal.core.errors import DocumentExtractionError, ServiceNotConfiguredError
from placement_portal.services import document_service
from placement_portal.services.document_service import DocumentParsingService, build_storage_path, owns_path
from placement_portal.utils import file_upload
from placement_portal.utils.file_upload import check_extension, extract_from_txt, extract_text


# ============================================================
# DIRECT UPLOAD
# ============================================================

def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Asha Rao")
    doc.add_paragraph("")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "SQL"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def test_txt_decoding_fallbacks():
    assert extract_from_txt("naïve".encode("utf-8")) == "naïve"
    assert extract_from_txt("café".encode("latin-1")) == "café"
    # smart quotes only exist in cp1252
    assert extract_from_txt(b"\x93quoted\x94") == "\u201cquoted\u201d"
    # 0x81 is unassigned in cp1252
    assert extract_from_txt(b"a\x81b") == "a\x81b"


def test_docx_paragraphs_and_table_rows():
    assert extract_text(".docx", _docx_bytes()) == "Asha Rao\nPython | SQL"


def test_doc_is_rejected_with_guidance():
    with pytest.raises(HTTPException) as info:
        check_extension("resume.DOC")
    assert info.value.status_code == 400
    assert ".docx" in info.value.detail


def test_unknown_extension_rejected():
    with pytest.raises(HTTPException) as info:
        check_extension("resume.odt")
    assert info.value.status_code == 400


def test_empty_text_rejected():
    with pytest.raises(HTTPException) as info:
        extract_text(".txt", b"   \n ")
    assert info.value.detail == "Text could not be extracted from the file."


def test_corrupt_pdf_rejected():
    with pytest.raises(HTTPException) as info:
        extract_text(".pdf", b"not really a pdf")
    assert info.value.status_code == 400
    assert info.value.detail == "Text could not be extracted from the file."


def test_oversized_upload_rejected():
    upload = MagicMock()
    upload.filename = "resume.txt"

    async def read():
        return b"x" * (1024 * 1024 + 1)

    upload.read = read
    with patch.object(file_upload, "get_settings", return_value=Settings(max_upload_size_mb=1)):
        with pytest.raises(HTTPException) as info:
            asyncio.run(file_upload.extract_text_from_file(upload))
    assert info.value.status_code == 413


# ============================================================
# STORED DOCUMENTS
# ============================================================

def test_storage_path_layout():
    assert build_storage_path(7, "cv.pdf", now_ms=1700000000000) == "7/resume-1700000000000-cv.pdf"
    assert build_storage_path(7, "a/b.pdf", now_ms=1) == "7/resume-1-a_b.pdf"


def test_owns_path(student):
    assert owns_path(student, "7/resume-1-cv.pdf")
    assert not owns_path(student, "8/resume-1-cv.pdf")
    assert not owns_path(student, "7/../8/resume.pdf")
    assert not owns_path(student, "")


@pytest.fixture
def parser():
    storage = MagicMock()
    with patch.object(document_service, "ResumeAnalyticsService") as analytics, \
         patch.object(document_service, "get_settings", return_value=Settings(pdfco_api_key="pk", resume_bucket="resumes")):
        service = DocumentParsingService(storage=storage)
        service.analytics = analytics.return_value
        yield service


def test_parse_txt_deletes_file(student, parser):
    parser.storage.download.return_value = b"Plain resume text"

    result = parser.parse(student, "7/resume-1-cv.txt", "resumes")

    assert result == {"success": True, "text": "Plain resume text", "length": 17}
    parser.storage.delete.assert_called_once_with("7/resume-1-cv.txt")


def test_parse_rejects_other_users_path(student, parser):
    with pytest.raises(DocumentExtractionError):
        parser.parse(student, "8/resume-1-cv.txt", "resumes")
    parser.storage.download.assert_not_called()


def test_parse_rejects_unknown_bucket(student, parser):
    with pytest.raises(DocumentExtractionError):
        parser.parse(student, "7/resume-1-cv.txt", "avatars")


def test_parse_rejects_word_files(student, parser):
    parser.storage.download.return_value = b"..."
    with pytest.raises(DocumentExtractionError) as info:
        parser.parse(student, "7/resume-1-cv.docx", "resumes")
    assert info.value.message.startswith("DOC/DOCX parsing not yet supported")
    assert info.value.to_dict() == {"success": False, "error": info.value.message}
    parser.storage.delete.assert_not_called()


def test_parse_rejects_unknown_format(student, parser):
    parser.storage.download.return_value = b"..."
    with pytest.raises(DocumentExtractionError, match="Unsupported file format"):
        parser.parse(student, "7/resume-1-cv.rtf", "resumes")


def test_parse_pdf_through_conversion_api(student, parser):
    parser.storage.download.return_value = b"%PDF-1.4 ..."
    response = MagicMock(ok=True, status_code=200)
    response.json.return_value = {"error": False, "body": "Converted text"}

    with patch.object(document_service.requests, "post", return_value=response) as post:
        result = parser.parse(student, "7/resume-1-cv.pdf", "resumes")

    assert result["text"] == "Converted text"
    assert post.call_args.kwargs["headers"] == {"x-api-key": "pk"}
    assert post.call_args.kwargs["json"]["inline"] is True


def test_parse_pdf_conversion_failure(student, parser):
    parser.storage.download.return_value = b"%PDF-1.4 ..."
    response = MagicMock(ok=False, status_code=500, text="boom")

    with patch.object(document_service.requests, "post", return_value=response):
        with pytest.raises(DocumentExtractionError) as info:
            parser.parse(student, "7/resume-1-cv.pdf", "resumes")

    assert info.value.message == "Unable to parse PDF. Please copy the text and use the text area instead."
    parser.storage.delete.assert_not_called()


def test_pdf_conversion_needs_key(student, parser):
    parser.settings = Settings(pdfco_api_key="")
    with pytest.raises(ServiceNotConfiguredError, match="PDFCO_API_KEY is not configured"):
        parser.convert_pdf(b"%PDF")
