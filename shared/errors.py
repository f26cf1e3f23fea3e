"""
Shared error handling for the currency conversion service.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Uniform error envelope returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(alias="Error")


class ServiceException(Exception):
    """Base exception for service errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message)


class ConfigurationError(ServiceException):
    """Startup configuration errors."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class ValidationError(ServiceException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ExternalServiceError(ServiceException):
    """Transport-level failure talking to an external service."""

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None):
        self.service = service
        super().__init__("EXTERNAL_SERVICE_ERROR", message, details)


class ProviderError(ServiceException):
    """Error reported by an upstream provider in its own error body."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("PROVIDER_ERROR", message, details)


class ResponseParseError(ServiceException):
    """Upstream response body could not be decoded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("RESPONSE_PARSE_ERROR", message, details)


class MissingResultError(ServiceException):
    """Upstream success payload lacks the requested key."""

    def __init__(self, key: str, details: Optional[Dict[str, Any]] = None):
        self.key = key
        super().__init__("MISSING_RESULT", f"{key} not present in result", details)
