"""
Custom exceptions for SemOps.
Provides a clear hierarchy of errors for the conversion, query and validation layers.
"""

from typing import Any, Optional


class SemOpsError(Exception):
    """Base exception for all SemOps errors."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ConfigurationError(SemOpsError):
    """Raised when configuration is invalid, e.g. a clashing prefix table."""

    pass


class ParseError(SemOpsError):
    """Raised when a Turtle, JSON-LD or shapes document cannot be parsed."""

    def __init__(
        self,
        message: str,
        format: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["format"] = format
        super().__init__(message, details=details, **kwargs)
        self.format = format


class StreamFailure(SemOpsError):
    """Raised when the query engine reports an error for a result stream."""

    def __init__(
        self,
        message: str,
        mode: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["mode"] = mode
        super().__init__(message, details=details, **kwargs)
        self.mode = mode


class ShaclError(SemOpsError):
    """Raised when the SHACL engine fails to run (not when data is invalid)."""

    pass


class ConversionError(SemOpsError):
    """Raised when a graph cannot be written to the requested representation."""

    def __init__(
        self,
        message: str,
        format: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details["format"] = format
        super().__init__(message, details=details, **kwargs)
        self.format = format
