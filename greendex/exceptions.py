"""Greendex Exception Hierarchy.

The calculation engine never raises for bad activity or questionnaire data;
invalid values degrade to a zero contribution. Exceptions are reserved for the
edges of the system: emission model configuration, runtime settings and input
that is not structurally a record at all.

Exception Hierarchy:
    GreendexException (base)
    ├── ConfigurationError
    │   └── EmissionModelError
    │       └── UnknownEmissionModelError
    └── IngestError

All exceptions include rich context:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from greendex.exceptions import EmissionModelError
    >>> raise EmissionModelError(
    ...     message="Missing transport factor",
    ...     version="greendex-2025.1",
    ...     invalid_fields={"transport_factors.plane": "missing"},
    ... )
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class GreendexException(Exception):
    """Base exception for all Greendex errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "GREENDEX_INGEST_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "GREENDEX"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code from the class name.

        Returns:
            Error code like "GREENDEX_CONFIGURATION_ERROR"
        """
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Configuration Exceptions
# ==============================================================================

class ConfigurationError(GreendexException):
    """Runtime configuration is invalid.

    Example:
        >>> raise ConfigurationError(
        ...     message="Emission model file not found",
        ...     context={"path": "/etc/greendex/model.yaml"}
        ... )
    """
    pass


class EmissionModelError(ConfigurationError):
    """An emission model failed validation.

    Raised when a model is missing a factor for a member of one of its closed
    enumerations, or carries a non-positive or non-finite coefficient.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        version: Optional[str] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        """Initialize emission model error.

        Args:
            message: Error message
            context: Error context
            version: Version of the offending model
            invalid_fields: Dictionary of field_name -> reason
        """
        context = context or {}
        if version:
            context["version"] = version
        if invalid_fields:
            context["invalid_fields"] = invalid_fields
        super().__init__(message, context=context)


class UnknownEmissionModelError(EmissionModelError):
    """No emission model is registered under the requested version."""

    def __init__(self, version: str, available: Optional[list] = None):
        context = {"available": sorted(available or [])}
        super().__init__(
            f"Unknown emission model version: {version}",
            context=context,
            version=version,
        )


# ==============================================================================
# Input Exceptions
# ==============================================================================

class IngestError(GreendexException):
    """Input is not structurally a record.

    Raised at the input boundary when a payload cannot be interpreted as an
    activity row or a questionnaire response at all (for example a list where
    a mapping was expected, or unreadable JSON). Bad *values* inside a
    well-formed record never raise.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ):
        context = context or {}
        if source:
            context["source"] = source
        super().__init__(message, context=context)


# ==============================================================================
# Exception Utilities
# ==============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format exception chain for logging/display.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with full exception chain
    """
    lines = []
    current = exc

    while current is not None:
        if isinstance(current, GreendexException):
            lines.append(str(current))
            lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")

        current = getattr(current, "__cause__", None)

    return "\n".join(lines)


__all__ = [
    "GreendexException",
    "ConfigurationError",
    "EmissionModelError",
    "UnknownEmissionModelError",
    "IngestError",
    "format_exception_chain",
]
