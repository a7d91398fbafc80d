"""
Core components for single-table DynamoDB access.

- TableAccessor: record operations for one logical table in the shared table
- Key mapping helpers for the ``<logical table>|<id>`` partition key
- boto3 resource and Table factories
"""

from .accessor import (
    AccessorCapabilities,
    QueryPage,
    QueryPager,
    TableAccessor,
    create_table_accessor,
)
from .keys import (
    build_update_expression,
    format_item,
    format_key,
    physical_key_value,
    to_dynamodb_value,
)
from .resource import create_dynamodb_resource, create_table, get_table

__all__ = [
    "AccessorCapabilities",
    "QueryPage",
    "QueryPager",
    "TableAccessor",
    "create_table_accessor",
    "build_update_expression",
    "format_item",
    "format_key",
    "physical_key_value",
    "to_dynamodb_value",
    "create_dynamodb_resource",
    "create_table",
    "get_table",
]
