"""Generate Swagger 1.2 API documentation from annotated Go source comments."""

from .context import ScanContext
from .errors import (
    ApiDocError,
    ConfigurationError,
    OperationCommentError,
    ResolutionError,
    SourceParseError,
)
from .orchestrator import ApiDocuments, ApiParser

__all__ = [
    "ApiDocError",
    "ApiDocuments",
    "ApiParser",
    "ConfigurationError",
    "OperationCommentError",
    "ResolutionError",
    "ScanContext",
    "SourceParseError",
]
