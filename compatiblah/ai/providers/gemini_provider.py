from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_exponential

from compatiblah.core.errors import (
    EmptyContentError,
    GeminiResponseError,
    GeminiStatusError,
    RetryExhaustedError,
    TransportError,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 503})


class _Part(BaseModel):
    text: str = ""


class _Content(BaseModel):
    parts: list[_Part] | None = None


class _Candidate(BaseModel):
    content: _Content | None = None


class GenerateContentEnvelope(BaseModel):
    candidates: list[_Candidate] | None = None


class _RetryableStatus(Exception):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"retryable status {status_code}")
        self.status_code = status_code
        self.body = body


class GeminiProvider:
    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1",
        timeout_s: float = 60.0,
        max_attempts: int = 3,
        backoff_s: float = 1.0,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._model = model
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_attempts = max(1, max_attempts)
        self._backoff_s = backoff_s
        self._http_client = http_client
        self._sleep = sleep

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the first candidate's first text part."""
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        started = time.perf_counter()
        if self._http_client is not None:
            body = self._post_with_retry(self._http_client, payload)
        else:
            with httpx.Client(timeout=self._timeout_s) as client:
                body = self._post_with_retry(client, payload)
        logger.info(
            "gemini_generate_ok model=%s prompt_len=%s latency_ms=%s",
            self._model,
            len(prompt),
            int((time.perf_counter() - started) * 1000),
        )
        return first_candidate_text(body)

    def _post_once(self, client: httpx.Client, payload: dict[str, Any]) -> str:
        try:
            response = client.post(
                self.endpoint,
                params={"key": self._api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout_s,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"failed to make request: {exc}") from exc

        if response.status_code == 200:
            return response.text
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise _RetryableStatus(response.status_code, response.text)
        raise GeminiStatusError(response.status_code, response.text)

    def _post_with_retry(self, client: httpx.Client, payload: dict[str, Any]) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff_s),
            retry=retry_if_exception_type(_RetryableStatus),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            return retrying(self._post_once, client, payload)
        except _RetryableStatus as exc:
            logger.warning(
                "gemini_retries_exhausted model=%s status=%s attempts=%s",
                self._model,
                exc.status_code,
                self._max_attempts,
            )
            raise RetryExhaustedError(exc.status_code, exc.body, attempts=self._max_attempts) from exc


def first_candidate_text(body: str | bytes) -> str:
    try:
        envelope = GenerateContentEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise GeminiResponseError(f"failed to parse response: {exc}") from exc

    # null lists count as empty
    candidates = envelope.candidates or []
    content = candidates[0].content if candidates else None
    parts = content.parts if content is not None else None
    if not parts:
        raise EmptyContentError()
    return parts[0].text
