"""
Single-Table Accessor

Maps generic record operations for one logical table onto a shared physical
DynamoDB table. Records of every logical table live side by side and are told
apart only by the partition key prefix ``<logical table>|<id>``.

The accessor is deliberately thin:
- one DynamoDB request per call (query walks pages one request at a time)
- no caching, no retries, no error translation
- every call is reported to a logging callback before the request, and again
  with the fault when the request fails; the fault is then re-raised unchanged

All operations are coroutines. The blocking boto3 call runs in a worker thread
through asyncio.to_thread so the event loop keeps serving other tasks.

Example:
    accessor = create_table_accessor(DynamoDBConfig.from_env(), 'users')
    await accessor.put({'id': '42', 'name': 'Ada'})
    user = await accessor.get('42')
    async for user in accessor.query({
        'KeyConditionExpression': Key('PartitionKey').eq('users|42'),
    }):
        ...
"""

import asyncio
from collections import deque
from typing import Any, AsyncIterator, Deque, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DynamoDBConfig
from ..exceptions import ValidationError
from ..log_events import LoggerFunction, logging_callback
from .keys import (
    DEFAULT_KEY_SEPARATOR,
    DEFAULT_PRIMARY_KEY,
    KeyLike,
    build_update_expression,
    format_item,
    format_key,
    to_dynamodb_value,
)
from .resource import get_table


Record = Dict[str, Any]


class AccessorCapabilities(BaseModel):
    """Capabilities advertised alongside the accessor operations."""

    model_config = ConfigDict(frozen=True)

    primary_key: str = Field(
        default=DEFAULT_PRIMARY_KEY,
        description="Physical attribute used as the table's hash key"
    )


class QueryPage(BaseModel):
    """One page of a DynamoDB Query response."""

    items: List[Record] = Field(default_factory=list)
    last_evaluated_key: Optional[Dict[str, Any]] = None
    count: int = 0

    @property
    def has_more(self) -> bool:
        return bool(self.last_evaluated_key)

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> 'QueryPage':
        return cls(
            items=response.get('Items') or [],
            last_evaluated_key=response.get('LastEvaluatedKey'),
            count=response.get('Count') or 0
        )


class QueryPager:
    """Pull-based iterator over a paged query.

    Holds the continuation cursor, the items of the page being consumed and an
    exhausted flag. ``fetch_next_page()`` issues exactly one Query request;
    iterating with ``async for`` yields records and fetches the next page only
    once the buffered one is used up.
    """

    def __init__(self, accessor: 'TableAccessor', descriptor: Dict[str, Any]):
        self._accessor = accessor
        self._descriptor = dict(descriptor)
        self._cursor: Optional[Dict[str, Any]] = self._descriptor.get('ExclusiveStartKey')
        self._buffer: Deque[Record] = deque()
        self._exhausted = False
        self.pages_fetched = 0

    @property
    def cursor(self) -> Optional[Dict[str, Any]]:
        """LastEvaluatedKey of the most recent page."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        """True once the last page has been fetched."""
        return self._exhausted

    async def fetch_next_page(self) -> Optional[QueryPage]:
        """Fetch the next page, or return None when there are no more pages."""
        if self._exhausted:
            return None

        options = dict(self._descriptor)
        if self._cursor:
            options['ExclusiveStartKey'] = self._cursor

        page = await self._accessor.query_once(options)
        self.pages_fetched += 1
        self._cursor = page.last_evaluated_key
        if not page.has_more:
            self._exhausted = True
        return page

    def __aiter__(self) -> 'QueryPager':
        return self

    async def __anext__(self) -> Record:
        while not self._buffer:
            page = await self.fetch_next_page()
            if page is None:
                raise StopAsyncIteration
            self._buffer.extend(page.items)
        return self._buffer.popleft()


class TableAccessor:
    """
    Record accessor for one logical table stored in the shared physical table.

    Configuration (logical table name, physical table, key attribute, logging
    callback) is fixed at construction and nothing else is kept between calls.
    Concurrent calls run on worker threads and share the one Table handle.
    boto3 does not document resources as thread-safe; callers that need
    isolation can give each accessor its own handle from get_table().
    """

    def __init__(
        self,
        table,
        table_name: str,
        log: Optional[LoggerFunction] = None,
        *,
        physical_table_name: Optional[str] = None,
        primary_key: str = DEFAULT_PRIMARY_KEY,
        key_separator: str = DEFAULT_KEY_SEPARATOR
    ):
        """Initialize the accessor.

        Args:
            table: boto3 DynamoDB Table resource for the shared physical table
            table_name: Logical table name, used as the partition key prefix
            log: Logging callback ``log(event, payload)``; stdlib logging if None
            physical_table_name: Name reported in log payloads (defaults to table.name)
            primary_key: Hash key attribute of the physical table
            key_separator: Separator between logical table name and id
        """
        self._table = table
        self._table_name = table_name
        self._log = log or logging_callback()
        self._physical_table_name = physical_table_name or getattr(table, 'name', None)
        self._key_separator = key_separator
        self._custom = AccessorCapabilities(primary_key=primary_key)

    @property
    def table(self):
        return self._table

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def physical_table_name(self) -> Optional[str]:
        return self._physical_table_name

    @property
    def custom(self) -> AccessorCapabilities:
        return self._custom

    @property
    def primary_key(self) -> str:
        return self._custom.primary_key

    def format_key(self, key: KeyLike) -> Dict[str, Any]:
        return format_key(key, self._table_name, self.primary_key, self._key_separator)

    def format_item(self, item: Record) -> Record:
        return format_item(item, self._table_name, self.primary_key, self._key_separator)

    def _map_request(self, operation: str, mapper, value, payload_name: str, **payload) -> Dict[str, Any]:
        """Apply a key/record mapper; an unusable argument is logged as ``<operation>:error``."""
        try:
            return mapper(value)
        except ValidationError as e:
            self._log(operation, {'TableName': self._physical_table_name, payload_name: value, **payload})
            self._log(f"{operation}:error", e)
            raise

    async def get(self, key: KeyLike) -> Optional[Record]:
        """Fetch a record by key.

        Returns:
            The stored record, or None when no record has this key
        """
        key = self._map_request('get', self.format_key, key, 'Key')
        self._log('get', {'TableName': self._physical_table_name, 'Key': key})
        try:
            response = await asyncio.to_thread(self._table.get_item, Key=key)
            item = response.get('Item')
            self._log('get:result', {'Item': item})
            return item
        except Exception as e:
            self._log('get:error', e)
            raise

    async def put(self, item: Record, put_options: Optional[Dict[str, Any]] = None) -> Optional[Record]:
        """Create or overwrite a full record.

        Args:
            item: Record to store; its ``id`` becomes the partition key
            put_options: Extra PutItem parameters (ConditionExpression, ...),
                applied over the defaults

        Returns:
            The record previously stored under this key, or None on first write
        """
        item = to_dynamodb_value(self._map_request('put', self.format_item, item, 'Item'))
        self._log('put', {'TableName': self._physical_table_name, 'Item': item})
        try:
            put_kwargs = {
                'Item': item,
                'ReturnValues': 'ALL_OLD',
                **(put_options or {}),
            }
            response = await asyncio.to_thread(self._table.put_item, **put_kwargs)
            return response.get('Attributes')
        except Exception as e:
            self._log('put:error', e)
            raise

    async def update(self, key: KeyLike, updates: Record) -> Record:
        """Overwrite the given attributes of a record.

        Every attribute in ``updates`` replaces the stored attribute; all other
        attributes are left alone.

        Returns:
            The full record as stored after the update

        Raises:
            ValidationError: If ``updates`` is empty (no request is sent)
        """
        key = self._map_request('update', self.format_key, key, 'Key', Updates=updates)
        self._log('update', {'TableName': self._physical_table_name, 'Key': key, 'Updates': updates})
        try:
            update_expression, expression_names, expression_values = build_update_expression(updates)
            response = await asyncio.to_thread(
                self._table.update_item,
                Key=key,
                UpdateExpression=update_expression,
                ExpressionAttributeNames=expression_names,
                ExpressionAttributeValues=expression_values,
                ReturnValues='ALL_NEW'
            )
            return response.get('Attributes')
        except Exception as e:
            self._log('update:error', e)
            raise

    async def delete(self, key: KeyLike) -> Optional[Record]:
        """Delete a record by key.

        Returns:
            The record as it was before deletion, or None if there was none
        """
        key = self._map_request('delete', self.format_key, key, 'Key')
        self._log('delete', {'TableName': self._physical_table_name, 'Key': key})
        try:
            response = await asyncio.to_thread(
                self._table.delete_item,
                Key=key,
                ReturnValues='ALL_OLD'
            )
            return response.get('Attributes')
        except Exception as e:
            self._log('delete:error', e)
            raise

    async def query_once(self, descriptor: Dict[str, Any]) -> QueryPage:
        """Issue a single Query request and return its page.

        Args:
            descriptor: boto3 Table.query parameters; ``Select`` defaults to
                ALL_ATTRIBUTES

        Returns:
            QueryPage with the items, LastEvaluatedKey and Count
        """
        self._log('queryOnce', {'TableName': self._physical_table_name, 'Options': descriptor})
        try:
            query_kwargs = {
                'Select': 'ALL_ATTRIBUTES',
                **descriptor,
            }
            response = await asyncio.to_thread(self._table.query, **query_kwargs)
            return QueryPage.from_response(response)
        except Exception as e:
            self._log('queryOnce:error', e)
            raise

    def pages(self, descriptor: Dict[str, Any]) -> QueryPager:
        """Return a pager for the descriptor; each call starts a fresh cursor."""
        return QueryPager(self, descriptor)

    async def query(self, descriptor: Dict[str, Any]) -> AsyncIterator[Record]:
        """Yield every record matching the descriptor, across all pages.

        Pages are requested one at a time as the caller consumes records;
        stopping early leaves the remaining pages unrequested.
        """
        self._log('query', {'TableName': self._physical_table_name, 'Options': descriptor})
        try:
            async for item in self.pages(descriptor):
                yield item
        except Exception as e:
            self._log('query:error', e)
            raise


def create_table_accessor(
    config: DynamoDBConfig,
    table_name: str,
    log: Optional[LoggerFunction] = None,
    dynamodb=None
) -> TableAccessor:
    """
    Factory function to create a TableAccessor for one logical table.

    Args:
        config: DynamoDB configuration (physical table, key attribute, separator)
        table_name: Logical table name
        log: Logging callback; stdlib logging honouring enable_debug_logging if None
        dynamodb: Existing boto3 DynamoDB resource to share between accessors

    Returns:
        Configured TableAccessor instance
    """
    table = get_table(config, dynamodb)
    if log is None:
        log = logging_callback(verbose=config.enable_debug_logging)
    return TableAccessor(
        table,
        table_name,
        log,
        physical_table_name=config.single_table_name,
        primary_key=config.primary_key_attribute,
        key_separator=config.key_separator
    )
