# Base exception class
from .base import SingleTableError

from .local_errors import (
    ConnectionError,
    ValidationError,
)

__all__ = [
    "SingleTableError",
    "ConnectionError",
    "ValidationError",
]
