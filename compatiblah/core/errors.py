from __future__ import annotations


class CompatibilityError(RuntimeError):
    def __init__(self, message: str, *, code: str = "compatibility_failed"):
        super().__init__(message)
        self.code = code


class ConfigurationError(CompatibilityError):
    def __init__(self, message: str):
        super().__init__(message, code="not_configured")


class TransportError(CompatibilityError):
    """Request could not be built or sent. Never retried."""

    def __init__(self, message: str):
        super().__init__(message, code="transport_failed")


class GeminiStatusError(CompatibilityError):
    def __init__(self, status_code: int, body: str, *, code: str = "api_error"):
        super().__init__(f"API error: status {status_code}, body: {body}", code=code)
        self.status_code = status_code
        self.body = body


class RetryExhaustedError(GeminiStatusError):
    def __init__(self, status_code: int, body: str, attempts: int):
        super().__init__(status_code, body, code="retry_exhausted")
        self.attempts = attempts


class GeminiResponseError(CompatibilityError):
    def __init__(self, message: str):
        super().__init__(message, code="invalid_envelope")


class EmptyContentError(CompatibilityError):
    def __init__(self, message: str = "no content in response"):
        super().__init__(message, code="empty_content")


class SchemaCascadeError(CompatibilityError):
    """None of the known response shapes matched.

    ``failures`` keeps one ``(schema_name, message)`` pair per attempted
    decoder, in the order they were tried.
    """

    def __init__(self, failures: list[tuple[str, str]], text: str):
        details = ", ".join(f"{name} format error: {message}" for name, message in failures)
        super().__init__(
            f"failed to parse assessment JSON (all formats): {details}, cleaned text: {text}",
            code="unparseable_response",
        )
        self.failures = failures
        self.text = text
