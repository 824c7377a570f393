"""Error types raised while extracting API documentation."""

from __future__ import annotations


class ApiDocError(RuntimeError):
    """Fatal error that stops the whole documentation run."""

    kind = "internal"


class ConfigurationError(ApiDocError):
    """Raised when environment or project configuration is missing or invalid."""

    kind = "configuration"


class ResolutionError(ApiDocError):
    """Raised when a package path or model reference cannot be resolved."""

    kind = "resolution"


class SourceParseError(ApiDocError):
    """Raised when a Go source file cannot be parsed."""

    kind = "parse"


class OperationCommentError(ValueError):
    """Recoverable error for a single comment line that fails the directive grammar."""


__all__ = [
    "ApiDocError",
    "ConfigurationError",
    "OperationCommentError",
    "ResolutionError",
    "SourceParseError",
]
