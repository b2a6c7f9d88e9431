"""
Dialogflow protocol adapter interface.

Adapters encapsulate everything version-specific: reading the webhook body
into a normalized RequestModel, naming outgoing contexts, and serializing
the accumulated response into the version's wire schema. No other part of
the package builds wire-format structures.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from fulfillment.core.host import HostResponse
from fulfillment.errors import RequestConstructionError
from fulfillment.schemas.platforms import Platform, is_unspecified, v1_platform_name
from fulfillment.schemas.request import Context, FollowupEvent, RequestModel
from fulfillment.schemas.responses import BaseResponse, Payload, Text

logger = logging.getLogger(__name__)


class BaseAgentAdapter(ABC):
    """Contract for protocol adapters. One implementation per Dialogflow API version."""

    protocol_version: int

    def __init__(self, body: dict[str, Any], host_response: HostResponse) -> None:
        self._body = body
        self._host_response = host_response
        self._request: Optional[RequestModel] = None

    @property
    def request(self) -> RequestModel:
        if self._request is None:
            self._request = self.process_request()
        return self._request

    @abstractmethod
    def process_request(self) -> RequestModel:
        """Read the raw webhook body into a RequestModel. Raise if malformed."""
        ...

    @abstractmethod
    def normalize_context_name(self, name: str) -> str:
        """Return the name an outgoing context is stored and sent under."""
        ...

    @abstractmethod
    def context_matches(self, context: Context, name: str) -> bool:
        """Whether ``clear_context(name)`` removes the outgoing ``context``."""
        ...

    @abstractmethod
    def build_followup_event(self, event: FollowupEvent) -> dict[str, Any]:
        ...

    @abstractmethod
    def build_context(self, context: Context) -> dict[str, Any]:
        ...

    @abstractmethod
    def build_message(self, element: BaseResponse) -> dict[str, Any]:
        ...

    @abstractmethod
    def build_response(
        self,
        elements: Sequence[BaseResponse],
        followup_event: Optional[FollowupEvent],
        contexts: Sequence[Context],
    ) -> dict[str, Any]:
        """Serialize the full response state into the version's wire schema."""
        ...

    def add_context(self, contexts: list[Context], context: Context) -> Context:
        """Normalize ``context`` and append it, replacing one with the same name."""
        name = self.normalize_context_name(context.name)
        outgoing = context.model_copy(update={"name": name})
        for index, existing in enumerate(contexts):
            if existing.name == name:
                contexts[index] = outgoing
                break
        else:
            contexts.append(outgoing)
        logger.debug("Outgoing context set: %s", name)
        return outgoing

    def set_followup_event(self, event: FollowupEvent) -> FollowupEvent:
        """Fill version defaults into a followup event before it is stored."""
        return event

    def send_response(
        self,
        elements: Sequence[BaseResponse],
        followup_event: Optional[FollowupEvent],
        contexts: Sequence[Context],
    ) -> dict[str, Any]:
        payload = self.build_response(elements, followup_event, contexts)
        logger.debug(
            "Sending v%s response with %d message(s)", self.protocol_version, len(elements)
        )
        self._host_response.send(payload)
        return payload

    def _parse_contexts(self, raw_contexts: Any) -> tuple[Context, ...]:
        try:
            return tuple(Context.model_validate(raw) for raw in raw_contexts or [])
        except ValidationError as e:
            raise RequestConstructionError(f"Invalid input context: {e}") from e

    @staticmethod
    def _is_plain_text(elements: Sequence[BaseResponse]) -> bool:
        return (
            len(elements) == 1
            and isinstance(elements[0], Text)
            and is_unspecified(elements[0].platform)
        )

    @staticmethod
    def _first_text(elements: Sequence[BaseResponse]) -> Optional[str]:
        for element in elements:
            if isinstance(element, Text):
                return element.text
        return None

    @staticmethod
    def _is_raw_payload(element: BaseResponse) -> bool:
        return isinstance(element, Payload) and (
            element.raw_payload or element.platform == Platform.ACTIONS_ON_GOOGLE
        )

    @staticmethod
    def _merge_raw_payload(data: dict[str, Any], element: Payload) -> None:
        """Fold a raw payload into the top-level platform data map."""
        key = v1_platform_name(element.platform)
        if key is None:
            data.update(element.payload)
        else:
            data.setdefault(key, {}).update(element.payload)

    @staticmethod
    def _compact(data: dict[str, Any]) -> dict[str, Any]:
        return {key: value for key, value in data.items() if value is not None}
