"""
Local exceptions for the single-table accessor.

These are the only failures the accessor produces on its own:

1. ValidationError - an argument cannot be turned into a DynamoDB request
2. ConnectionError - the boto3 session, resource or Table handle cannot be built
"""

from typing import Any, Dict, Optional

from .base import SingleTableError


class ValidationError(SingleTableError):
    """Raised when a call is rejected before any request is sent to DynamoDB.

    Used for:
    - update() called with no attributes to update
    - keys that are neither a logical id nor a key mapping
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of argument-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class ConnectionError(SingleTableError):
    """Raised when the boto3 DynamoDB resource or table handle cannot be created.

    Used for:
    - Invalid credentials or region configuration at session creation
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)
