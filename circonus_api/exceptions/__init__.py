"""Custom exception classes for the Circonus API client."""

from typing import Optional, Dict, Any


class CirconusError(Exception):
    """Base exception for all Circonus API client operations.

    It provides common functionality for error handling and logging.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context
        }


class ConfigurationError(CirconusError):
    """Raised when client configuration is invalid.

    This exception is raised when:
    - Required configuration values are missing (e.g. the API token)
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.config_key:
            result["config_key"] = self.config_key
        if self.config_value:
            result["config_value"] = self.config_value
        return result


class ValidationError(CirconusError):
    """Raised when input is rejected before any request is made."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize validation error.

        Args:
            message: Error message describing the validation failure
            field_name: Name of the field that failed validation
            field_value: Value that failed validation
            context: Additional context about the validation failure
        """
        super().__init__(message, context)
        self.field_name = field_name
        self.field_value = field_value

    def __str__(self) -> str:
        """Return string representation including field information."""
        base_str = super().__str__()
        if self.field_name:
            return f"{base_str} (Field: {self.field_name})"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.field_name:
            result["field_name"] = self.field_name
        if self.field_value is not None:
            result["field_value"] = str(self.field_value)
        return result


class MissingIdentifierError(ValidationError):
    """Raised when a required CID is absent or empty."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, field_name="_cid", context=context)


class InvalidIdentifierError(ValidationError):
    """Raised when a CID does not match the resource pattern after normalization."""

    def __init__(self, message: str, cid: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, field_name="_cid", field_value=cid, context=context)
        self.cid = cid


class InvalidConfigError(ValidationError):
    """Raised when a write operation is given no record."""


class UnsupportedOperationError(CirconusError):
    """Raised when an endpoint does not offer the requested operation."""

    def __init__(self, message: str, operation: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.operation = operation


class TransportError(CirconusError):
    """Raised when a Circonus API call fails.

    This exception is raised when:
    - HTTP requests to the Circonus API fail
    - The API returns a non-2xx status code
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """Initialize transport error.

        Args:
            message: Error message describing the API failure
            status_code: HTTP status code from the failed request
            response_body: Raw response body from the failed request
            context: Additional context about the API failure
        """
        super().__init__(message, context)
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        """Return string representation including status code."""
        base_str = super().__str__()
        if self.status_code:
            return f"{base_str} (HTTP {self.status_code})"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.status_code:
            result["status_code"] = self.status_code
        if self.response_body:
            result["response_body"] = self.response_body
        return result

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client error (4xx status code)."""
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server error (5xx status code)."""
        return self.status_code is not None and 500 <= self.status_code < 600

    @property
    def is_retryable(self) -> bool:
        """Check if this error might be retryable."""
        # No status code means the request never got an answer
        if self.status_code is None:
            return True
        if self.is_server_error:
            return True
        return self.status_code in [408, 429]


class RateLimitError(TransportError):
    """Raised when the API answers 429 Too Many Requests."""

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        response_body: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, status_code=429, response_body=response_body, context=context)
        self.retry_after = retry_after

    def __str__(self) -> str:
        """Return string representation including retry information."""
        base_str = super().__str__()
        if self.retry_after:
            return f"{base_str} (Retry after {self.retry_after} seconds)"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.retry_after:
            result["retry_after"] = self.retry_after
        return result


class RequestTimeoutError(TransportError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(
        self,
        message: str,
        timeout_seconds: Optional[float] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context=context)
        self.timeout_seconds = timeout_seconds
        self.operation = operation

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.timeout_seconds:
            result["timeout_seconds"] = self.timeout_seconds
        if self.operation:
            result["operation"] = self.operation
        return result


class DecodeError(CirconusError):
    """Raised when a response body cannot be parsed into the expected record shape."""

    def __init__(
        self,
        message: str,
        response_body: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context)
        self.response_body = response_body

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result = super().to_dict()
        if self.response_body:
            result["response_body"] = self.response_body
        return result


# Export all exception classes
__all__ = [
    'CirconusError',
    'ConfigurationError',
    'ValidationError',
    'MissingIdentifierError',
    'InvalidIdentifierError',
    'InvalidConfigError',
    'UnsupportedOperationError',
    'TransportError',
    'RateLimitError',
    'RequestTimeoutError',
    'DecodeError'
]
