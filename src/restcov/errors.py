"""Exception hierarchy for restcov.

Errors raised here are fatal for a run; soft matching problems are
recorded as :class:`~restcov.matching.diagnostics.Diagnostic` entries
instead.
"""

from __future__ import annotations


class RestcovError(Exception):
    """Base class for all restcov errors."""


class ConfigError(RestcovError):
    """Required configuration is missing or inconsistent."""


class SchemaError(RestcovError):
    """The schema document cannot be read, parsed or enumerated."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class AuditLogError(RestcovError):
    """A request-log record fails basic structural deserialization."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class RequestBodyError(RestcovError):
    """A request body is not valid JSON for the endpoint it targets."""

    def __init__(self, message: str, *, method: str, path: str) -> None:
        super().__init__(f"Invalid request body for '{method.upper()} {path}': {message}")
        self.method = method
        self.path = path
