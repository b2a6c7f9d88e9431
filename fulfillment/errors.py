"""
Errors raised by the fulfillment core.

Construction and validation errors are raised synchronously. Dispatch errors
are raised from the awaited ``handle_request`` coroutine.
"""

from __future__ import annotations


class FulfillmentError(Exception):
    """Base class for all fulfillment errors."""


class RequestConstructionError(FulfillmentError, ValueError):
    """Missing host handles or a body that is neither a v1 nor a v2 request."""


class FulfillmentValidationError(FulfillmentError, ValueError):
    """Response state that cannot be sent."""


class UnsupportedPlatformError(FulfillmentValidationError):
    def __init__(self, platform: object) -> None:
        super().__init__(f"Platform is not supported: {platform}")
        self.platform = platform


class UnknownResponseTypeError(FulfillmentError, TypeError):
    def __init__(self, response: object) -> None:
        super().__init__(f"unknown response type: {type(response).__name__}")
        self.response = response


class InvalidContextError(FulfillmentValidationError):
    pass


class InvalidFollowupEventError(FulfillmentValidationError):
    pass


class DispatchError(FulfillmentError):
    """Raised when a request cannot be routed to a handler."""


class InvalidHandlerError(DispatchError, TypeError):
    pass


class NoHandlerError(DispatchError):
    status_code = 400

    def __init__(self, action: object = None) -> None:
        super().__init__("No handler for requested action")
        self.action = action
