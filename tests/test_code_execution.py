"""
Tests for the code execution proxy. requests.post is patched.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from placement_portal.core.config import Settings
from placement_portal.core.errors import RequestValidationFailed, ServiceNotConfiguredError, UpstreamServiceError
from placement_portal.services import code_execution
from placement_portal.services.code_execution import execute_code, resolve_language_id

SETTINGS = Settings(judge0_api_key="rk", judge0_base_url="https://judge.test", judge0_host="judge.test")


@pytest.fixture(autouse=True)
def settings():
    with patch.object(code_execution, "get_settings", return_value=SETTINGS):
        yield SETTINGS


@pytest.mark.parametrize("language,expected", [
    ("python", 71), ("JavaScript", 63), ("java", 62), ("cpp", 54), (" c ", 50),
])
def test_language_ids(language, expected):
    assert resolve_language_id(language) == expected


def test_unsupported_language():
    with pytest.raises(RequestValidationFailed, match="Unsupported language") as info:
        execute_code("print(1)", "cobol")
    assert info.value.status_code == 400


def test_submission_is_synchronous():
    verdict = {"stdout": "3\n", "stderr": None, "status": {"id": 3, "description": "Accepted"}, "time": "0.01"}
    response = MagicMock(ok=True)
    response.json.return_value = verdict

    with patch.object(code_execution.requests, "post", return_value=response) as post:
        result = execute_code("print(1 + 2)", "python", None)

    assert result == verdict
    args, kwargs = post.call_args
    assert args[0] == "https://judge.test/submissions"
    assert kwargs["params"] == {"base64_encoded": "false", "wait": "true"}
    assert kwargs["headers"] == {"X-RapidAPI-Key": "rk", "X-RapidAPI-Host": "judge.test"}
    assert kwargs["json"] == {"language_id": 71, "source_code": "print(1 + 2)", "stdin": ""}


def test_judge_error_keeps_status_and_body():
    response = MagicMock(ok=False, status_code=429, text="quota exceeded")

    with patch.object(code_execution.requests, "post", return_value=response):
        with pytest.raises(UpstreamServiceError) as info:
            execute_code("print(1)", "python")

    assert info.value.status_code == 429
    assert info.value.to_dict() == {"error": "Failed to submit code to Judge0", "details": "quota exceeded"}


def test_judge_unreachable():
    with patch.object(code_execution.requests, "post", side_effect=requests.ConnectionError("down")):
        with pytest.raises(UpstreamServiceError) as info:
            execute_code("print(1)", "python")
    assert info.value.status_code == 502


def test_missing_key(settings):
    with patch.object(code_execution, "get_settings", return_value=Settings(judge0_api_key="")):
        with pytest.raises(ServiceNotConfiguredError, match="JUDGE0_API_KEY"):
            execute_code("print(1)", "python")
