"""Core value types, logging and exceptions."""

from semops.core.schemas import (
    ObjectValue,
    Quad,
    Severity,
    Term,
    ValidationReport,
    ValidationResult,
)
from semops.core.exceptions import (
    SemOpsError,
    ConfigurationError,
    ConversionError,
    ParseError,
    ShaclError,
    StreamFailure,
)

__all__ = [
    "ObjectValue",
    "Quad",
    "Severity",
    "Term",
    "ValidationReport",
    "ValidationResult",
    "SemOpsError",
    "ConfigurationError",
    "ConversionError",
    "ParseError",
    "ShaclError",
    "StreamFailure",
]
