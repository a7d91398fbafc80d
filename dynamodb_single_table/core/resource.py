"""
boto3 handles for the shared physical table.

Builds the DynamoDB service resource from DynamoDBConfig (credentials, region,
endpoint, botocore retry/pool/timeout settings) and hands out Table handles.
Also provisions the shared table for local development and tests.
"""

import logging

import boto3
from botocore.config import Config

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError

logger = logging.getLogger(__name__)


def create_dynamodb_resource(config: DynamoDBConfig):
    """Create a boto3 DynamoDB service resource from configuration.

    Args:
        config: DynamoDB configuration

    Returns:
        boto3 DynamoDB ServiceResource

    Raises:
        ConnectionError: If the session or resource cannot be created
    """
    try:
        session = boto3.Session(
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name
        )

        resource_kwargs = {
            'region_name': config.region_name
        }

        if config.endpoint_url:
            resource_kwargs['endpoint_url'] = config.endpoint_url

        resource_kwargs['config'] = Config(
            retries={'max_attempts': config.retries},
            max_pool_connections=config.max_pool_connections,
            read_timeout=config.timeout_seconds,
            connect_timeout=config.timeout_seconds
        )

        return session.resource('dynamodb', **resource_kwargs)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB resource: {e}")
        raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e


def get_table(config: DynamoDBConfig, dynamodb=None):
    """Get the boto3 Table handle for the shared physical table.

    Args:
        config: DynamoDB configuration
        dynamodb: Existing service resource to reuse (created from config if None)

    Returns:
        boto3 DynamoDB Table resource
    """
    if dynamodb is None:
        dynamodb = create_dynamodb_resource(config)
    try:
        return dynamodb.Table(config.single_table_name)
    except Exception as e:
        logger.error(f"Failed to access table '{config.single_table_name}': {e}")
        raise ConnectionError(
            f"Failed to access table '{config.single_table_name}': {e}",
            e,
            {'table_name': config.single_table_name}
        ) from e


def create_table(config: DynamoDBConfig, dynamodb=None, wait: bool = True):
    """Create the shared physical table (hash key only, on-demand billing).

    Intended for DynamoDB Local, LocalStack and tests; production tables are
    provisioned outside this library.

    Args:
        config: DynamoDB configuration
        dynamodb: Existing service resource to reuse (created from config if None)
        wait: Block until the table exists

    Returns:
        boto3 DynamoDB Table resource
    """
    if dynamodb is None:
        dynamodb = create_dynamodb_resource(config)

    table = dynamodb.create_table(
        TableName=config.single_table_name,
        KeySchema=[
            {'AttributeName': config.primary_key_attribute, 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': config.primary_key_attribute, 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    if wait:
        table.wait_until_exists()
    logger.info(f"Created table {config.single_table_name} (hash key: {config.primary_key_attribute})")
    return table
