"""
Test configuration and fixtures for the single-table accessor.

Provides a moto-backed shared table and accessors bound to it, plus a mocked
boto3 Table for call-level assertions.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add parent directory to path so tests can import the package and tests.helpers
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from dynamodb_single_table import (
    DynamoDBConfig,
    EventRecorder,
    TableAccessor,
    create_table_accessor,
)


@pytest.fixture
def mock_dynamodb_config():
    """DynamoDB configuration for mocked testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        single_table_name="test-single-table",
        primary_key_attribute="PartitionKey",
        key_separator="|"
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def single_table(mock_dynamodb_resource, mock_dynamodb_config):
    """Create the shared physical table, with a GSI for multi-page queries."""
    table = mock_dynamodb_resource.create_table(
        TableName=mock_dynamodb_config.single_table_name,
        KeySchema=[
            {'AttributeName': 'PartitionKey', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PartitionKey', 'AttributeType': 'S'},
            {'AttributeName': 'record_type', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'RecordTypeIndex',
                'KeySchema': [
                    {'AttributeName': 'record_type', 'KeyType': 'HASH'},
                    {'AttributeName': 'PartitionKey', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def recorder():
    """Logging callback that records every accessor event."""
    return EventRecorder()


@pytest.fixture
def users_accessor(mock_dynamodb_config, mock_dynamodb_resource, single_table, recorder):
    """Accessor for the 'users' logical table backed by moto."""
    return create_table_accessor(
        mock_dynamodb_config,
        "users",
        log=recorder,
        dynamodb=mock_dynamodb_resource
    )


@pytest.fixture
def orders_accessor(mock_dynamodb_config, mock_dynamodb_resource, single_table, recorder):
    """Accessor for the 'orders' logical table sharing the same physical table."""
    return create_table_accessor(
        mock_dynamodb_config,
        "orders",
        log=recorder,
        dynamodb=mock_dynamodb_resource
    )


@pytest.fixture
def mock_table():
    """Mock DynamoDB table resource."""
    table = Mock()
    table.name = "test-single-table"
    table.get_item.return_value = {}
    table.put_item.return_value = {}
    table.update_item.return_value = {'Attributes': {}}
    table.delete_item.return_value = {}
    table.query.return_value = {'Items': [], 'Count': 0}
    return table


@pytest.fixture
def mocked_accessor(mock_table, recorder):
    """Accessor over a mocked Table for call-level assertions."""
    return TableAccessor(mock_table, "users", recorder)


# Sample Data Fixtures

@pytest.fixture
def sample_user():
    """Sample user record for testing."""
    return {
        "id": "user-1",
        "record_type": "user",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "is_active": True,
        "login_count": 3
    }
