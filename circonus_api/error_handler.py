"""Centralized error handling and logging for the circonus-api command."""

import traceback
from typing import Dict, Any, Optional, Tuple
import structlog

from .exceptions import (
    CirconusError,
    ConfigurationError,
    ValidationError,
    InvalidIdentifierError,
    UnsupportedOperationError,
    TransportError,
    RateLimitError,
    RequestTimeoutError,
    DecodeError
)

logger = structlog.get_logger(__name__)

EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


class ErrorHandler:
    """Turns exceptions raised by a command into a log event and an exit code."""

    def __init__(self, app_name: str = "circonus-api-client"):
        self.app_name = app_name
        self.logger = logger.bind(app_name=app_name)

    def handle_command_error(
        self,
        error: Exception,
        command: str,
        arguments: Optional[Dict[str, Any]] = None
    ) -> Tuple[int, str]:
        """Log ``error`` and format it for the terminal.

        Args:
            error: Exception raised while running the command
            command: Command name, e.g. ``maintenance get``
            arguments: Command arguments

        Returns:
            Tuple of (exit code, message for stderr)
        """
        self._log_error(error, command, arguments or {})
        exit_code = EXIT_CONFIG_ERROR if isinstance(error, ConfigurationError) else EXIT_ERROR
        return exit_code, self._format_error_response(error, command)

    def _log_error(self, error: Exception, command: str, arguments: Dict[str, Any]) -> None:
        log_context: Dict[str, Any] = {
            "command": command,
            "error_type": type(error).__name__,
            "error_message": str(error)
        }

        # Add argument keys (not values, the token may be among them)
        if arguments:
            log_context["argument_keys"] = list(arguments.keys())

        if isinstance(error, CirconusError) and error.context:
            log_context["error_context"] = error.context

        if isinstance(error, TransportError) and error.status_code:
            log_context["status_code"] = error.status_code

        if isinstance(error, ValidationError) and error.field_name:
            log_context["field_name"] = error.field_name

        if isinstance(error, RateLimitError) and error.retry_after:
            log_context["retry_after"] = error.retry_after

        if isinstance(error, RequestTimeoutError) and error.timeout_seconds:
            log_context["timeout_seconds"] = error.timeout_seconds

        if isinstance(error, (ValidationError, UnsupportedOperationError)):
            self.logger.warning("Command validation error", **log_context)
        elif isinstance(error, TransportError):
            if error.is_client_error and not isinstance(error, RateLimitError):
                self.logger.warning("Command API client error", **log_context)
            else:
                self.logger.error("Command API error", **log_context)
        elif isinstance(error, CirconusError):
            self.logger.error("Command error", **log_context)
        else:
            log_context["traceback"] = traceback.format_exc()
            self.logger.error("Command unexpected error", **log_context)

    def _format_error_response(self, error: Exception, command: str) -> str:
        if isinstance(error, InvalidIdentifierError):
            message = f"Invalid identifier in {command}: {error.message}"
        elif isinstance(error, ValidationError):
            message = f"Validation Error in {command}: {error.message}"
        elif isinstance(error, UnsupportedOperationError):
            message = f"Unsupported operation {command}: {error.message}"
        elif isinstance(error, RateLimitError):
            message = f"Rate Limit Error in {command}: {error.message}"
            if error.retry_after:
                message += f"\nRetry after: {error.retry_after} seconds"
        elif isinstance(error, TransportError):
            message = f"API Error in {command}: {error.message}"
            if error.status_code:
                message += f"\nHTTP Status: {error.status_code}"
            if error.is_retryable:
                message += "\nThis error may be temporary. Please try again."
        elif isinstance(error, DecodeError):
            message = f"Response Error in {command}: {error.message}"
        elif isinstance(error, ConfigurationError):
            message = f"Configuration Error: {error.message}"
            if error.config_key:
                message += f"\nSetting: {error.config_key}"
        elif isinstance(error, CirconusError):
            message = f"Error in {command}: {error.message}"
        else:
            message = f"Unexpected error in {command}: {type(error).__name__}: {error}"

        return message
