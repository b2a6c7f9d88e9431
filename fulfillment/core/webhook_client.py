"""
Per-request fulfillment client.

Handler code receives a WebhookClient: it reads the normalized request,
adds rich responses, manages outgoing contexts and the followup event. The
client is built for exactly one request and sends at most once.

Example::

    async def welcome(agent: WebhookClient) -> None:
        agent.add("Welcome!")
        agent.add(Suggestions(replies=["Weather", "News"]))
        agent.set_context({"name": "weather", "lifespan": 2})

    client = WebhookClient(request=JSONRequest(body), response=BufferedResponse())
    await client.handle_request({"input.welcome": welcome})
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.core.dispatch import DispatchEngine
from fulfillment.core.host import HostRequest, HostResponse
from fulfillment.core.normalizer import normalize_request
from fulfillment.errors import InvalidFollowupEventError, RequestConstructionError
from fulfillment.schemas.platforms import PlatformTag
from fulfillment.schemas.request import Context, FollowupEvent, RequestModel
from fulfillment.schemas.responses import BaseResponse
from fulfillment.services.context_store import ContextInput, ContextStore
from fulfillment.services.response_accumulator import (
    ResponseAccumulator,
    ResponseInput,
)

logger = logging.getLogger(__name__)


class WebhookClient:
    """Dialogflow v1/v2 webhook fulfillment for a single request."""

    def __init__(
        self,
        request: Optional[HostRequest] = None,
        response: Optional[HostResponse] = None,
    ) -> None:
        if request is None:
            raise RequestConstructionError("Request can NOT be empty.")
        if response is None:
            raise RequestConstructionError("Response can NOT be empty.")
        self._host_request = request
        self._host_response = response
        self._adapter: BaseAgentAdapter = normalize_request(request.body, response)
        self._responses = ResponseAccumulator()
        self._contexts = ContextStore(self._adapter)
        self._followup_event: Optional[FollowupEvent] = None
        self._sent = False

    # Request

    @property
    def request(self) -> RequestModel:
        return self._adapter.request

    @property
    def protocol_version(self) -> int:
        return self.request.protocol_version

    @property
    def action(self) -> Optional[str]:
        return self.request.action

    @property
    def parameters(self) -> dict[str, Any]:
        return self.request.parameters

    @property
    def contexts(self) -> tuple[Context, ...]:
        return self.request.input_contexts

    @property
    def request_source(self) -> Optional[PlatformTag]:
        return self.request.source

    @property
    def query(self) -> Optional[str]:
        return self.request.query

    @property
    def locale(self) -> Optional[str]:
        return self.request.locale

    @property
    def session(self) -> Optional[str]:
        return self.request.session

    @property
    def intent(self) -> Optional[str]:
        return self.request.intent

    @property
    def original_request(self) -> Optional[dict[str, Any]]:
        return self.request.original_request

    @property
    def host_request(self) -> HostRequest:
        return self._host_request

    @property
    def headers(self) -> dict[str, str]:
        """HTTP headers of the webhook call, empty when the host has none."""
        return dict(getattr(self._host_request, "headers", None) or {})

    @property
    def host_response(self) -> HostResponse:
        return self._host_response

    # Responses

    @property
    def responses(self) -> tuple[BaseResponse, ...]:
        return self._responses.elements

    def add(self, response: ResponseInput) -> "WebhookClient":
        self._responses.add(response)
        return self

    def existing_suggestion(self, platform: Optional[PlatformTag] = None):
        return self._responses.existing_suggestion(platform)

    def existing_payload(self, platform: Optional[PlatformTag] = None):
        return self._responses.existing_payload(platform)

    # Contexts

    @property
    def outgoing_contexts(self) -> tuple[Context, ...]:
        return self._contexts.outgoing

    def set_context(self, context: ContextInput) -> "WebhookClient":
        self._contexts.set_context(context)
        return self

    def clear_context(self, name: str) -> "WebhookClient":
        self._contexts.clear_context(name)
        return self

    def clear_outgoing_contexts(self) -> "WebhookClient":
        self._contexts.clear_outgoing_contexts()
        return self

    def get_context(self, name: str) -> Optional[Context]:
        return self._contexts.get_context(name)

    # Followup event

    @property
    def followup_event(self) -> Optional[FollowupEvent]:
        return self._followup_event

    def set_followup_event(
        self, event: Union[str, FollowupEvent, Mapping[str, Any]]
    ) -> "WebhookClient":
        if isinstance(event, str):
            event = {"name": event}
        if isinstance(event, Mapping):
            name = event.get("name")
            if not isinstance(name, str) or not name:
                raise InvalidFollowupEventError(
                    "Followup event must be a string or have a name string"
                )
            try:
                event = FollowupEvent.model_validate(dict(event))
            except ValidationError as e:
                raise InvalidFollowupEventError(f"Invalid followup event: {e}") from e
        if not isinstance(event, FollowupEvent):
            raise InvalidFollowupEventError(
                "Followup event must be a string or have a name string"
            )
        self._followup_event = self._adapter.set_followup_event(event)
        return self

    # Send

    @property
    def sent(self) -> bool:
        return self._sent

    def send(
        self, response: Union[ResponseInput, Iterable[ResponseInput], None] = None
    ) -> dict[str, Any]:
        """
        Validate and send everything accumulated, plus ``response`` if given.

        ``response`` may be a string, a response element, or a list/tuple of
        either. The accumulated state is discarded afterwards.
        """
        if self._sent:
            raise RuntimeError("Response has already been sent for this request")
        if isinstance(response, (list, tuple)):
            self._responses.extend(response)
        elif response is not None:
            self._responses.add(response)

        source = self.request.source
        self._responses.validate_platform(source)
        self._responses.apply_leading_text(source)

        payload = self._adapter.send_response(
            self._responses.drain(), self._followup_event, self._contexts.drain()
        )
        self._followup_event = None
        self._sent = True
        logger.debug("Response sent for action %s", self.action)
        return payload

    async def handle_request(self, handler: Any) -> Any:
        """
        Run ``handler`` for this request and send the accumulated response.

        ``handler`` is a callable, a mapping of action name to callable (the
        ``None`` key is the wildcard), or a HandlerRegistry. Raises
        InvalidHandlerError for any other shape and NoHandlerError, after
        setting status 400, when no handler matches.
        """
        return await DispatchEngine(self).dispatch(handler)
