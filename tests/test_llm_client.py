"""
Tests for reply parsing and gateway error mapping.
"""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from placement_portal.core.config import Settings
from placement_portal.core.errors import ServiceNotConfiguredError, UpstreamServiceError
from placement_portal.services import llm_client
from placement_portal.services.llm_client import LLMClient, extract_json, parse_or_fallback


def test_extract_json_from_json_fence():
    reply = 'Here you go:\n```json\n{"atsScore": 81}\n```\nGood luck!'
    assert extract_json(reply) == {"atsScore": 81}


def test_extract_json_from_plain_fence():
    assert extract_json('```\n{"a": [1, 2]}\n```') == {"a": [1, 2]}


def test_extract_json_bare():
    assert extract_json('  {"ok": true}  ') == {"ok": True}


def test_parse_or_fallback_uses_raw_text():
    data, degraded = parse_or_fallback("not json at all", lambda raw: {"summary": raw})
    assert degraded is True
    assert data == {"summary": "not json at all"}


def test_parse_or_fallback_rejects_non_object():
    data, degraded = parse_or_fallback("[1, 2, 3]", lambda raw: {"raw": raw})
    assert degraded is True
    assert data == {"raw": "[1, 2, 3]"}


def test_parse_or_fallback_ok():
    data, degraded = parse_or_fallback('```json\n{"x": 1}\n```', lambda raw: {})
    assert (data, degraded) == ({"x": 1}, False)


# ============================================================
# GATEWAY ERRORS
# ============================================================

def _client_raising(exc):
    client = LLMClient(api_key="k", base_url="http://gateway.test/v1", model="m", timeout=5)
    client.client = MagicMock()
    client.client.chat.completions.create.side_effect = exc
    return client


def _status_error(cls, status):
    request = httpx.Request("POST", "http://gateway.test/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls("gateway said no", response=response, body=None)


def test_rate_limit_message():
    client = _client_raising(_status_error(openai.RateLimitError, 429))
    with pytest.raises(UpstreamServiceError) as info:
        client.complete("sys", "user")
    assert info.value.message == "Rate limits exceeded, please try again later."
    assert info.value.status_code == 429


def test_payment_required_message():
    client = _client_raising(_status_error(openai.APIStatusError, 402))
    with pytest.raises(UpstreamServiceError) as info:
        client.complete("sys", "user")
    assert info.value.message == "Payment required, please add credits to your AI workspace."
    assert info.value.status_code == 402


def test_other_gateway_error():
    client = _client_raising(_status_error(openai.InternalServerError, 500))
    with pytest.raises(UpstreamServiceError) as info:
        client.complete("sys", "user")
    assert info.value.message == "AI gateway error"


def test_empty_reply():
    client = LLMClient(api_key="k", base_url="http://gateway.test/v1", model="m", timeout=5)
    client.client = MagicMock()
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=""))]
    client.client.chat.completions.create.return_value = response

    with pytest.raises(UpstreamServiceError, match="No content in AI response"):
        client.complete("sys", "user")


def test_complete_passes_token_limits():
    client = LLMClient(api_key="k", base_url="http://gateway.test/v1", model="m", timeout=5)
    client.client = MagicMock()
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content="{}"))]
    client.client.chat.completions.create.return_value = response

    assert client.complete("sys", "user", max_tokens=1536, temperature=0.7) == "{}"
    kwargs = client.client.chat.completions.create.call_args.kwargs
    assert kwargs["max_tokens"] == 1536
    assert kwargs["temperature"] == 0.7
    assert kwargs["messages"][0] == {"role": "system", "content": "sys"}


def test_missing_key_is_not_configured():
    with patch.object(llm_client, "get_settings", return_value=Settings(llm_api_key="")):
        with pytest.raises(ServiceNotConfiguredError) as info:
            llm_client.get_llm_client()
    assert info.value.message == "LLM_API_KEY is not configured"
    assert info.value.status_code == 500
