"""
Code Execution - forwards submissions to a Judge0-compatible service.

The judge runs synchronously (wait=true) and its JSON result is returned
untouched (stdout, stderr, status, time, memory, ...).
"""

import logging
from typing import Optional

import requests

from placement_portal.core.config import get_settings
from placement_portal.core.errors import (
    RequestValidationFailed, ServiceNotConfiguredError, UpstreamServiceError
)

logger = logging.getLogger(__name__)

# Judge0 language ids
LANGUAGE_IDS = {
    "python": 71,      # Python 3
    "javascript": 63,  # Node.js
    "java": 62,
    "cpp": 54,         # GCC 9.2.0
    "c": 50,           # GCC 9.2.0
}


def resolve_language_id(language: Optional[str]) -> int:
    language_id = LANGUAGE_IDS.get((language or "").strip().lower())
    if language_id is None:
        raise RequestValidationFailed("Unsupported language")
    return language_id


def execute_code(code: str, language: str, stdin: Optional[str] = "") -> dict:
    """Submit code and wait for the judge's verdict."""
    settings = get_settings()
    if not settings.judge0_api_key:
        raise ServiceNotConfiguredError("JUDGE0_API_KEY")

    language_id = resolve_language_id(language)
    logger.info("Submitting code to judge (language=%s, id=%s)", language, language_id)

    try:
        response = requests.post(
            f"{settings.judge0_base_url}/submissions",
            params={"base64_encoded": "false", "wait": "true"},
            headers={
                "X-RapidAPI-Key": settings.judge0_api_key,
                "X-RapidAPI-Host": settings.judge0_host,
            },
            json={"language_id": language_id, "source_code": code, "stdin": stdin or ""},
            timeout=settings.http_timeout_seconds,
        )
    except requests.RequestException as e:
        logger.error("Judge request failed: %s", e)
        raise UpstreamServiceError("Failed to submit code to Judge0", details=str(e))

    if not response.ok:
        logger.error("Judge submission error: %s %s", response.status_code, response.text)
        raise UpstreamServiceError(
            "Failed to submit code to Judge0",
            status_code=response.status_code,
            details=response.text,
        )

    return response.json()
