#!/usr/bin/env python3
"""
Basic usage example for the single-table accessor.

Demonstrates:
1. Setting up configuration
2. Creating accessors for two logical tables sharing one physical table
3. put / get / update / delete
4. Lazily walking a multi-page query
"""

import asyncio
import logging

from boto3.dynamodb.conditions import Key

from dynamodb_single_table import DynamoDBConfig, create_dynamodb_resource, create_table_accessor


async def main():
    """Demonstrate the accessor against DynamoDB Local."""
    logging.basicConfig(level=logging.INFO)

    # 1. Configure DynamoDB connection
    print("1. Setting up DynamoDB configuration...")
    config = DynamoDBConfig.for_local_development()

    # In deployed environments:
    # config = DynamoDBConfig.from_env()

    # 2. Accessors for two logical tables share one boto3 resource
    print("2. Creating accessors...")
    dynamodb = create_dynamodb_resource(config)
    users = create_table_accessor(config, "users", dynamodb=dynamodb)
    orders = create_table_accessor(config, "orders", dynamodb=dynamodb)

    # 3. Write and read records
    print("3. Writing records...")
    previous = await users.put({"id": "ada", "name": "Ada Lovelace", "plan": "free"})
    print(f"   previous user record: {previous}")
    await orders.put({"id": "ada", "total": 12.5, "customer": "ada"})

    user = await users.get("ada")
    print(f"   user: {user}")

    # 4. Partial update returns the full stored record
    print("4. Updating user plan...")
    user = await users.update("ada", {"plan": "pro"})
    print(f"   updated: {user}")

    # 5. Query by physical key; pages are fetched as they are consumed
    print("5. Querying...")
    async for order in orders.query({
        "KeyConditionExpression": Key(orders.custom.primary_key).eq("orders|ada"),
    }):
        print(f"   order: {order}")

    # 6. Delete returns the removed record
    print("6. Deleting...")
    removed = await users.delete("ada")
    print(f"   removed: {removed}")
    await orders.delete("ada")


if __name__ == "__main__":
    asyncio.run(main())
