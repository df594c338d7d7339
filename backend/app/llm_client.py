from __future__ import annotations

import logging
import re
import time
from typing import Any, Callable

from openai import OpenAI, APIError, RateLimitError

from app.settings import get_settings

log = logging.getLogger(__name__)

MODEL_CHECK_ERROR = "Could not verify models. Check API Key permissions."

# Model families that accept chat completions with image/file parts
CHAT_MODEL_PREFIXES = ("gpt-4", "gpt-5", "o1", "o3", "o4")

_RETRY_HINT = re.compile(r'try again in (\d+(?:\.\d+)?)(ms|s)')


def parse_retry_after(message: str, attempt: int) -> float:
    """Wait time for a rate-limited attempt: the server hint if present, else 1s, 2s, 4s..."""
    match = _RETRY_HINT.search(message)
    if match:
        value, unit = match.groups()
        return float(value) / 1000 if unit == 'ms' else float(value)
    return float(2 ** attempt)


class LlmClient:
    def __init__(self, client: OpenAI | None = None, sleep: Callable[[float], None] = time.sleep) -> None:
        settings = get_settings()
        self._client = client or OpenAI(
            api_key=settings.openai_api_key,
            max_retries=3,
            timeout=settings.openai_request_timeout_seconds,
        )
        self._settings = settings
        self._sleep = sleep
        self._selected_model: str | None = None

    def _make_request_with_retry(self, request_func, max_retries=3) -> dict[str, Any]:
        """
        Make OpenAI request with exponential backoff for rate limits.

        Args:
            request_func: Function that makes the OpenAI API call
            max_retries: Maximum number of retries for rate limit errors

        Returns:
            Response from OpenAI API as a plain dict

        Raises:
            RuntimeError: If request fails after all retries
        """
        last_error = None

        for attempt in range(max_retries + 1):
            try:
                resp = request_func()
                return resp.model_dump()
            except RateLimitError as e:
                last_error = e
                if attempt < max_retries:
                    wait_time = parse_retry_after(str(getattr(e, 'message', e)), attempt)
                    log.warning("Rate limited, retry %d/%d in %.2fs", attempt + 1, max_retries, wait_time)
                    self._sleep(wait_time)
                    continue
                raise RuntimeError(
                    f"Rate limit exceeded after {max_retries} retries. "
                    f"Please wait a moment and try again. "
                    f"Error: {e}"
                ) from e
            except APIError as e:
                raise RuntimeError(f"API error: {e}") from e

        raise RuntimeError(f"Request failed: {last_error}") from last_error

    def list_models(self) -> list[str]:
        """Model ids visible to the configured key that can run the analysis."""
        try:
            page = self._client.models.list()
        except APIError as e:
            raise RuntimeError(f"Model listing error: {e}") from e
        ids = sorted(m.id for m in page)
        return [mid for mid in ids if mid.startswith(CHAT_MODEL_PREFIXES)]

    def select_model(self, available: list[str] | None = None) -> str:
        """
        Choose the analysis model.
        Preferred model if the key can see it, else the first available one,
        else the configured model as a blind fallback.
        """
        preferred = self._settings.openai_analysis_model
        if available is None:
            if self._selected_model is not None:
                return self._selected_model
            try:
                available = self.list_models()
            except RuntimeError as e:
                log.warning("Model discovery failed, using %s: %s", preferred, e)
                return preferred

        if preferred in available or not available:
            selected = preferred
        else:
            selected = available[0]
        self._selected_model = selected
        return selected

    def analysis_completion(self, messages: list[dict[str, Any]], model: str | None = None) -> str:
        """Run the analysis prompt and return the model's free-text answer."""
        model_name = model or self.select_model()

        def request():
            return self._client.chat.completions.create(
                model=model_name,
                messages=messages,
            )

        try:
            raw = self._make_request_with_retry(request)
        except RuntimeError as e:
            raise RuntimeError(f"Analysis model error: {e}") from e

        content = raw["choices"][0]["message"].get("content")
        return content or ""


_singleton: LlmClient | None = None


def get_llm_client() -> LlmClient:
    """Get LLM client singleton instance."""
    global _singleton
    if _singleton is None:
        _singleton = LlmClient()
    return _singleton
