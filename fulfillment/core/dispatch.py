"""
Dispatch engine.

A handler is either a single callable that handles every request, or a table
of action name → callable with an optional wildcard used when the action has
no entry. Handlers may be sync or return an awaitable; either way the engine
waits for them before the accumulated response is sent.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, Union

from fulfillment.errors import InvalidHandlerError, NoHandlerError

if TYPE_CHECKING:
    from fulfillment.core.webhook_client import WebhookClient

logger = logging.getLogger(__name__)

HandlerFn = Callable[["WebhookClient"], Union[Awaitable[Any], Any]]

WILDCARD_KEYS = (None, "*")


@dataclass(frozen=True)
class SingleHandler:
    fn: HandlerFn

    def resolve(self, action: Optional[str]) -> Optional[HandlerFn]:
        return self.fn


@dataclass(frozen=True)
class HandlerTable:
    handlers: Mapping[str, HandlerFn] = field(default_factory=dict)
    wildcard: Optional[HandlerFn] = None

    def resolve(self, action: Optional[str]) -> Optional[HandlerFn]:
        if action is not None and self.handlers.get(action) is not None:
            return self.handlers[action]
        return self.wildcard


Handler = Union[SingleHandler, HandlerTable]


def resolve_handler(handler: Any) -> Handler:
    """Turn a callable, a mapping or a registry into a Handler."""
    if isinstance(handler, (SingleHandler, HandlerTable)):
        return handler
    as_table = getattr(handler, "as_table", None)
    if callable(as_table):
        return as_table()
    if isinstance(handler, Mapping):
        for key, fn in handler.items():
            if not callable(fn):
                raise InvalidHandlerError(f"Handler for action {key!r} is not callable")
        wildcard = next(
            (handler[key] for key in WILDCARD_KEYS if handler.get(key) is not None),
            None,
        )
        handlers = {
            key: fn for key, fn in handler.items() if key not in WILDCARD_KEYS
        }
        return HandlerTable(handlers=handlers, wildcard=wildcard)
    if callable(handler):
        return SingleHandler(handler)
    raise InvalidHandlerError(
        "handle_request must be given a handler function or a mapping of "
        "Dialogflow action names to handler functions"
    )


class DispatchEngine:
    """Routes one request to its handler, awaits it, then sends the response."""

    def __init__(self, client: "WebhookClient") -> None:
        self._client = client

    async def dispatch(self, handler: Any) -> Any:
        resolved = resolve_handler(handler)
        action = self._client.action
        fn = resolved.resolve(action)
        if fn is None:
            logger.debug("No handler for requested action: %s", action)
            self._client.host_response.status(NoHandlerError.status_code)
            raise NoHandlerError(action)

        logger.debug("Dispatching action %s", action)
        result = fn(self._client)
        if inspect.isawaitable(result):
            result = await result
        if not self._client.sent:
            self._client.send()
        return result
