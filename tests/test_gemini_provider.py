import json
import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from compatiblah.ai.config import AIConfig  # noqa: E402
from compatiblah.ai.factory import get_ai_client  # noqa: E402
from compatiblah.ai.providers.gemini_provider import GeminiProvider, first_candidate_text  # noqa: E402
from compatiblah.core.errors import (  # noqa: E402
    ConfigurationError,
    EmptyContentError,
    GeminiResponseError,
    GeminiStatusError,
    RetryExhaustedError,
    TransportError,
)


def _envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}, {"text": "ignored"}]}}, {"content": {}}]}


class _ScriptedHandler:
    """Serves queued responses and records every request."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class GeminiProviderTests(unittest.TestCase):
    def _provider(self, handler: _ScriptedHandler) -> tuple[GeminiProvider, list[float]]:
        sleeps: list[float] = []
        provider = GeminiProvider(
            "gemini-2.0-flash",
            api_key="test-key",
            base_url="https://example.test/v1",
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
            sleep=sleeps.append,
        )
        return provider, sleeps

    def test_returns_first_candidate_text(self):
        handler = _ScriptedHandler([httpx.Response(200, json=_envelope('{"score": 4}'))])
        provider, sleeps = self._provider(handler)

        self.assertEqual(provider.generate("assess these two"), '{"score": 4}')
        self.assertEqual(sleeps, [])

        request = handler.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.path, "/v1/models/gemini-2.0-flash:generateContent")
        self.assertEqual(request.url.params["key"], "test-key")
        self.assertEqual(
            json.loads(request.content),
            {"contents": [{"parts": [{"text": "assess these two"}]}]},
        )

    def test_retries_rate_limits_with_exponential_backoff(self):
        handler = _ScriptedHandler(
            [
                httpx.Response(429, text="slow down"),
                httpx.Response(503, text="unavailable"),
                httpx.Response(200, json=_envelope("ok")),
            ]
        )
        provider, sleeps = self._provider(handler)

        self.assertEqual(provider.generate("p"), "ok")
        self.assertEqual(len(handler.requests), 3)
        self.assertEqual(sleeps, [1.0, 2.0])

    def test_gives_up_after_three_attempts(self):
        handler = _ScriptedHandler([httpx.Response(503, text=f"busy {n}") for n in range(3)])
        provider, sleeps = self._provider(handler)

        with self.assertRaises(RetryExhaustedError) as ctx:
            provider.generate("p")

        self.assertEqual(len(handler.requests), 3)
        self.assertEqual(sleeps, [1.0, 2.0])
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.body, "busy 2")
        self.assertEqual(ctx.exception.code, "retry_exhausted")

    def test_other_statuses_fail_without_retry(self):
        handler = _ScriptedHandler([httpx.Response(400, text="bad request")])
        provider, sleeps = self._provider(handler)

        with self.assertRaises(GeminiStatusError) as ctx:
            provider.generate("p")

        self.assertNotIsInstance(ctx.exception, RetryExhaustedError)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("bad request", str(ctx.exception))
        self.assertEqual(len(handler.requests), 1)
        self.assertEqual(sleeps, [])

    def test_transport_failure_is_not_retried(self):
        handler = _ScriptedHandler([httpx.ConnectError("connection refused")])
        provider, sleeps = self._provider(handler)

        with self.assertRaises(TransportError):
            provider.generate("p")
        self.assertEqual(len(handler.requests), 1)
        self.assertEqual(sleeps, [])

    def test_empty_candidates_raise(self):
        for body in ({"candidates": []}, {}, {"candidates": [{"content": {"parts": []}}]}):
            handler = _ScriptedHandler([httpx.Response(200, json=body)])
            provider, _ = self._provider(handler)
            with self.subTest(body=body):
                with self.assertRaises(EmptyContentError):
                    provider.generate("p")

    def test_null_lists_count_as_empty_content(self):
        for body in (
            '{"candidates": null}',
            '{"candidates": [{"content": null}]}',
            '{"candidates": [{"content": {"parts": null}}]}',
        ):
            with self.subTest(body=body):
                with self.assertRaises(EmptyContentError):
                    first_candidate_text(body)

    def test_malformed_envelope_raises(self):
        with self.assertRaises(GeminiResponseError):
            first_candidate_text("<html>oops</html>")


class FactoryTests(unittest.TestCase):
    def _config(self, **overrides) -> AIConfig:
        values = dict(
            provider="gemini",
            api_key="real-key",
            model="gemini-2.0-flash",
            base_url="https://example.test/v1",
            timeout_s=5.0,
            max_attempts=3,
            backoff_s=1.0,
        )
        values.update(overrides)
        return AIConfig(**values)

    def test_builds_gemini_provider(self):
        client = get_ai_client(self._config())
        self.assertIsInstance(client, GeminiProvider)
        self.assertEqual(client.endpoint, "https://example.test/v1/models/gemini-2.0-flash:generateContent")

    def test_missing_or_placeholder_key_is_rejected(self):
        for key in (None, "your_gemini_key", "changeme"):
            with self.subTest(key=key):
                with self.assertRaises(ConfigurationError):
                    get_ai_client(self._config(api_key=key))

    def test_unknown_provider_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            get_ai_client(self._config(provider="openai"))


if __name__ == "__main__":
    unittest.main()
