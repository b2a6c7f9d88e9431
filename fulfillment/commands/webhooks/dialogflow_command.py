"""
Command to handle Dialogflow fulfillment webhook calls.

Builds a WebhookClient for the request, dispatches it to the registered
handlers and returns the response payload the adapter produced.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException

from fulfillment.core.host import BufferedResponse, JSONRequest
from fulfillment.core.registry import HandlerRegistry
from fulfillment.core.webhook_client import WebhookClient
from fulfillment.errors import (
    FulfillmentValidationError,
    NoHandlerError,
    RequestConstructionError,
    UnknownResponseTypeError,
)
from fulfillment.infra.logging_config import get_logger


class DialogflowWebhookCommand:
    """
    Command to handle a Dialogflow webhook request.
    Normalizes the body, runs the matching handler and sends its response.
    """

    def __init__(self, registry: HandlerRegistry) -> None:
        self.registry = registry
        self.logger = get_logger("dialogflow_command")

    async def execute(
        self, body: dict[str, Any], headers: Optional[dict[str, str]] = None
    ) -> tuple[int, dict[str, Any]]:
        """
        Execute the Dialogflow webhook: normalize, dispatch, send.

        Args:
            body: Parsed JSON body of the webhook call.
            headers: Request headers, readable by handlers as ``agent.headers``.

        Returns:
            tuple: (status code, response payload).

        Raises:
            HTTPException: 400 if the body is not a Dialogflow request, no
                handler matches the action, or the response fails validation.
        """
        response = BufferedResponse()
        try:
            client = WebhookClient(
                request=JSONRequest(body=body, headers=headers or {}),
                response=response,
            )
        except RequestConstructionError as e:
            self.logger.warning("Dialogflow webhook parse error: %s", e)
            raise HTTPException(status_code=400, detail=str(e)) from e

        try:
            await client.handle_request(self.registry)
        except NoHandlerError as e:
            self.logger.warning("No handler for action %s", e.action)
            raise HTTPException(status_code=response.status_code, detail=str(e)) from e
        except (FulfillmentValidationError, UnknownResponseTypeError) as e:
            self.logger.warning("Dialogflow response rejected: %s", e)
            raise HTTPException(status_code=400, detail=str(e)) from e

        self.logger.info(
            "Dialogflow webhook handled: action=%s version=%s",
            client.action,
            client.protocol_version,
        )
        return response.status_code, response.payload or {}
