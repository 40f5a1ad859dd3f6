"""
Direct-upload text extraction for the ATS flow.

    .pdf   PyPDF2, page by page
    .docx  python-docx, paragraphs first, then table rows ("a | b | c")
    .txt   first of utf-8 / cp1252 / latin-1 that decodes

Legacy .doc is refused with a conversion hint, anything else with a list
of accepted types. The size limit is MAX_UPLOAD_SIZE_MB (5 by default).
Every failure is an HTTPException; an upload that yields no text is a 400.
"""

import io
import logging
from typing import Callable, Dict, Tuple

from docx import Document
from fastapi import HTTPException, UploadFile
from PyPDF2 import PdfReader

from placement_portal.core.config import get_settings

logger = logging.getLogger(__name__)

# latin-1 maps every byte, so it goes last
TEXT_ENCODINGS = ('utf-8', 'cp1252', 'latin-1')

NO_TEXT_MESSAGE = "Text could not be extracted from the file."
DOC_MESSAGE = "Legacy .doc files are not supported. Please save the file as .docx or PDF, or paste the text directly."


def _reject(status_code: int, detail: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=detail)


def extract_from_pdf(content: bytes) -> str:
    try:
        pages = PdfReader(io.BytesIO(content)).pages
        return '\n'.join(filter(None, (page.extract_text() for page in pages)))
    except Exception as e:
        logger.warning("Could not read PDF upload: %s", e)
        raise _reject(400, NO_TEXT_MESSAGE)


def extract_from_docx(content: bytes) -> str:
    try:
        document = Document(io.BytesIO(content))
    except Exception as e:
        logger.warning("Could not read DOCX upload: %s", e)
        raise _reject(400, NO_TEXT_MESSAGE)

    lines = [p.text for p in document.paragraphs if p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            cells = [c for c in cells if c]
            if cells:
                lines.append(' | '.join(cells))
    return '\n'.join(lines)


def extract_from_txt(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS[:-1]:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            pass
    return content.decode(TEXT_ENCODINGS[-1])


EXTRACTORS: Dict[str, Tuple[str, Callable[[bytes], str]]] = {
    '.pdf': ("PDF", extract_from_pdf),
    '.docx': ("Word Document", extract_from_docx),
    '.txt': ("Plain Text", extract_from_txt),
}


def get_file_extension(filename: str) -> str:
    """'CV.Final.PDF' -> '.pdf'; '' when there is no dot."""
    _, dot, ext = filename.rpartition('.')
    return f".{ext.lower()}" if dot else ''


def check_extension(filename: str) -> str:
    ext = get_file_extension(filename)
    if ext == '.doc':
        raise _reject(400, DOC_MESSAGE)
    if ext not in EXTRACTORS:
        allowed = ", ".join(e.lstrip('.').upper() for e in EXTRACTORS)
        raise _reject(400, f"Unsupported file type '{ext}'. Allowed: {allowed}")
    return ext


def check_size(content: bytes) -> None:
    settings = get_settings()
    if len(content) > settings.max_upload_size_bytes:
        raise _reject(413, f"File too large. Maximum size: {settings.max_upload_size_mb}MB")


def extract_text(ext: str, content: bytes) -> str:
    _, extractor = EXTRACTORS[ext]
    text = extractor(content)
    if not text.strip():
        raise _reject(400, NO_TEXT_MESSAGE)
    return text


async def extract_text_from_file(file: UploadFile) -> Tuple[str, str]:
    """Validate an upload and return (text, filename)."""
    if not file.filename:
        raise _reject(400, "No filename provided")

    ext = check_extension(file.filename)
    content = await file.read()
    check_size(content)

    text = extract_text(ext, content)
    logger.info("Extracted %d characters from upload %s", len(text), file.filename)
    return text, file.filename


def get_supported_formats() -> dict:
    return {
        "supported_formats": [{"extension": ext, "name": name} for ext, (name, _) in EXTRACTORS.items()],
        "max_size_mb": get_settings().max_upload_size_mb,
    }
