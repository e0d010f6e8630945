"""
Error taxonomy for the trigger adapter.

Resolution errors are raised synchronously, before a user handler runs.
Errors raised by user handlers are never wrapped and are not part of this
hierarchy.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    CONFIGURATION = "CONFIGURATION"
    USAGE = "USAGE"


class AdapterError(Exception):
    """Base exception class for adapter errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        category: ErrorCategory = ErrorCategory.CONFIGURATION,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.details = details or {}
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "details": self.details,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class ConfigurationError(AdapterError):
    """Raised when a builder or trigger resource cannot be configured."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
            details=details,
        )


class MissingProjectError(ConfigurationError):
    """Raised when a trigger resource needs the project id and none is configured."""

    def __init__(self):
        super().__init__(
            "GCLOUD_PROJECT is not set; the project id is required to resolve the trigger resource.",
            details={"setting": "GCLOUD_PROJECT"},
        )


class ParamsUnavailableError(AdapterError):
    """Raised when context.params is read on a namespace-only builder."""

    def __init__(self, reason: str):
        super().__init__(
            message=reason,
            error_code="PARAMS_UNAVAILABLE",
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.USAGE,
        )


class MalformedPayloadWarning(UserWarning):
    """Category for handlers that return None instead of a value or awaitable."""
