"""
DynamoDB Single-Table Accessor

Async record access (get/put/update/delete/query) for many logical tables
stored in one shared DynamoDB table, built on boto3 and Pydantic.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConnectionError,
    SingleTableError,
    ValidationError,
)
from .core import (
    AccessorCapabilities,
    QueryPage,
    QueryPager,
    TableAccessor,
    create_dynamodb_resource,
    create_table,
    create_table_accessor,
    format_item,
    format_key,
    get_table,
)
from .log_events import EventRecorder, LoggerFunction, logging_callback

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConnectionError",
    "SingleTableError",
    "ValidationError",

    # Accessor
    "AccessorCapabilities",
    "QueryPage",
    "QueryPager",
    "TableAccessor",
    "create_table_accessor",

    # Key mapping
    "format_item",
    "format_key",

    # boto3 handles
    "create_dynamodb_resource",
    "create_table",
    "get_table",

    # Logging callbacks
    "EventRecorder",
    "LoggerFunction",
    "logging_callback",
]
