"""
Language Model Client

The AI gateway speaks the OpenAI chat-completions API, so we use the
openai library pointed at the configured base URL.

AI is used ONLY for:
- Resume content generation (profile rows -> enhanced resume JSON)
- ATS scoring (resume text -> fixed-schema score breakdown)
- Cover letter drafting

Replies are expected to be JSON, possibly wrapped in a markdown fence.
"""
import json
import logging
import re
from typing import Any, Callable, Tuple

import openai
from openai import OpenAI

from placement_portal.core.config import get_settings
from placement_portal.core.errors import ServiceNotConfiguredError, UpstreamServiceError

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)

RATE_LIMIT_MESSAGE = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required, please add credits to your AI workspace."


def extract_json(text: str) -> Any:
    """
    Extract JSON from a model reply.
    Handles replies where the model wraps JSON in markdown code blocks.
    Raises ValueError (json.JSONDecodeError) when the text is not JSON.
    """
    match = FENCE_RE.search(text)
    payload = match.group(1) if match else text
    return json.loads(payload.strip())


def parse_or_fallback(text: str, fallback: Callable[[str], dict]) -> Tuple[dict, bool]:
    """
    Parse a reply as a JSON object, or build the fallback from the raw text.

    Returns (data, degraded). degraded is True when the fallback was used.
    """
    try:
        data = extract_json(text)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data, False
    except ValueError as e:
        logger.warning("Failed to parse AI response as JSON, using fallback: %s", e)
        return fallback(text), True


class LLMClient:
    """
    Wrapper for the chat-completions gateway with error mapping.
    """

    def __init__(self, api_key: str, base_url: str, model: str, timeout: float):
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self.model = model

    def complete(
        self,
        system_prompt: str,
        user_content: str,
        max_tokens: int = None,
        temperature: float = None,
    ) -> str:
        """
        Call the gateway and return the raw text reply.

        Raises UpstreamServiceError with distinct messages for rate limiting
        (429) and exhausted credits (402).
        """
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content}
                ],
                **kwargs
            )
        except openai.RateLimitError as e:
            logger.error("AI gateway rate limited: %s", e)
            raise UpstreamServiceError(RATE_LIMIT_MESSAGE, status_code=429, details=str(e))
        except openai.APIStatusError as e:
            logger.error("AI gateway error: %s %s", e.status_code, e.message)
            if e.status_code == 402:
                raise UpstreamServiceError(PAYMENT_REQUIRED_MESSAGE, status_code=402, details=str(e))
            raise UpstreamServiceError("AI gateway error", status_code=502, details=str(e))
        except openai.APIConnectionError as e:
            logger.error("AI gateway unreachable: %s", e)
            raise UpstreamServiceError("AI gateway unreachable", status_code=503, details=str(e))

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""
        if not content:
            raise UpstreamServiceError("No content in AI response", status_code=502)

        logger.info("AI response received (%d chars)", len(content))
        return content

    def test_connection(self) -> bool:
        """Test if the gateway answers with the configured key."""
        try:
            self.complete("Reply with the single word OK.", "ping", max_tokens=5)
            return True
        except UpstreamServiceError as e:
            logger.warning("AI gateway connection test failed: %s", e.message)
            return False


# Singleton instance
_llm_client: LLMClient = None


def get_llm_client() -> LLMClient:
    """
    Get or create the gateway client (singleton pattern).
    A missing API key fails the calling operation only.
    """
    global _llm_client
    settings = get_settings()
    if not settings.llm_api_key:
        raise ServiceNotConfiguredError("LLM_API_KEY")
    if _llm_client is None:
        _llm_client = LLMClient(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            timeout=settings.llm_timeout_seconds,
        )
    return _llm_client
