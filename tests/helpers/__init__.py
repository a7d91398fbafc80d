"""
Test helpers for the single-table accessor.

The accessor API is async; tests are plain pytest functions that drive it
with asyncio.run.
"""

import asyncio
from typing import Any, AsyncIterator, List

from botocore.exceptions import ClientError


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


async def _collect(iterator: AsyncIterator[Any]) -> List[Any]:
    return [item async for item in iterator]


def collect(iterator: AsyncIterator[Any]) -> List[Any]:
    """Drain an async iterator into a list."""
    return run(_collect(iterator))


def create_client_error(error_code: str, message: str = "Test error", operation_name: str = "TestOperation") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name=operation_name
    )


__all__ = [
    'run',
    'collect',
    'create_client_error',
]
