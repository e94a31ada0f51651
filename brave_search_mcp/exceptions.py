"""Custom exceptions for the Brave Search MCP server."""


class BraveSearchError(Exception):
    """Base exception for all Brave Search errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RateLimitExceeded(BraveSearchError):
    """The per-second or per-month request quota is exhausted."""

    def __init__(self, message: str = "Rate limit exceeded", details: dict | None = None):
        super().__init__(message, details)


class UpstreamHttpError(BraveSearchError):
    """The Brave API answered with a non-2xx status."""

    def __init__(self, status: int, reason: str, body: str):
        super().__init__(f"Brave API error: {status} {reason}\n{body}")
        self.status = status
        self.reason = reason
        self.body = body


class UpstreamParseError(BraveSearchError):
    """The Brave API response body could not be parsed."""

    def __init__(self, cause: Exception):
        super().__init__(f"Failed to parse Brave API response: {cause}")
        self.cause = cause


class UpstreamRequestError(BraveSearchError):
    """The request never produced a response (connect error, timeout)."""

    def __init__(self, cause: Exception):
        super().__init__(f"Brave API request failed: {cause}")
        self.cause = cause


class UnknownCodeError(BraveSearchError, ValueError):
    """A country, language or freshness code is not in the supported set."""

    def __init__(self, kind: str, input: str):
        super().__init__(f"Unknown {kind} code: {input}")
        self.kind = kind
        self.input = input
