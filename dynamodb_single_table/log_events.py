"""
Logging callback contract for TableAccessor.

The accessor reports every call through a plain callable ``log(event, payload)``.
Event names are ``<op>`` before a request, ``<op>:result`` after a successful
get and ``<op>:error`` when a request fails. The callback's return value is
ignored and it must not raise.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

LoggerFunction = Callable[[str, Any], None]

OPERATIONS = ('get', 'put', 'update', 'delete', 'queryOnce', 'query')

EVENTS = (
    'get', 'get:result', 'get:error',
    'put', 'put:error',
    'update', 'update:error',
    'delete', 'delete:error',
    'queryOnce', 'queryOnce:error',
    'query', 'query:error',
)


def logging_callback(target: Optional[logging.Logger] = None, verbose: bool = False) -> LoggerFunction:
    """Build a LoggerFunction that forwards accessor events to stdlib logging.

    Args:
        target: Logger to write to (this module's logger if None)
        verbose: Log request events at INFO instead of DEBUG

    Returns:
        Callback suitable for TableAccessor(log=...)
    """
    target = target or logger
    request_level = logging.INFO if verbose else logging.DEBUG

    def log(event: str, payload: Any) -> None:
        if event.endswith(':error'):
            exc_info = payload if isinstance(payload, BaseException) else None
            target.error("%s: %s", event, payload, exc_info=exc_info)
        elif event.endswith(':result'):
            target.debug("%s: %s", event, payload)
        else:
            target.log(request_level, "%s: %s", event, payload)

    return log


class EventRecorder:
    """LoggerFunction that keeps every ``(event, payload)`` pair it receives."""

    def __init__(self):
        self.events: List[Tuple[str, Any]] = []

    def __call__(self, event: str, payload: Any) -> None:
        self.events.append((event, payload))

    @property
    def names(self) -> List[str]:
        return [event for event, _ in self.events]

    def payloads(self, event: str) -> List[Any]:
        return [payload for name, payload in self.events if name == event]

    def count(self, event: str) -> int:
        return self.names.count(event)

    def clear(self) -> None:
        self.events.clear()
