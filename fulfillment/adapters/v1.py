"""
Dialogflow v1 webhook adapter.

Requests carry a top-level ``result``; responses use ``speech``,
``displayText``, numbered ``messages``, ``contextOut`` and ``followupEvent``.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.schemas.platforms import platform_from_source, v1_platform_name
from fulfillment.schemas.request import Context, FollowupEvent, RequestModel
from fulfillment.schemas.responses import (
    BaseResponse,
    Card,
    Image,
    Payload,
    Suggestions,
    Text,
)

# v1 rich message type codes
TEXT_MESSAGE = 0
CARD_MESSAGE = 1
QUICK_REPLIES_MESSAGE = 2
IMAGE_MESSAGE = 3
PAYLOAD_MESSAGE = 4


class V1Adapter(BaseAgentAdapter):
    """Dialogflow v1 adapter: short context names, lowercase platform names."""

    protocol_version = 1

    def process_request(self) -> RequestModel:
        result = self._body.get("result") or {}
        original_request = self._body.get("originalRequest")
        source = original_request.get("source") if original_request else None
        metadata = result.get("metadata") or {}
        return RequestModel(
            protocol_version=1,
            action=result.get("action") or None,
            parameters=result.get("parameters") or {},
            input_contexts=self._parse_contexts(result.get("contexts")),
            source=platform_from_source(source),
            query=result.get("resolvedQuery"),
            locale=self._body.get("lang"),
            session=self._body.get("sessionId"),
            intent=metadata.get("intentName"),
            original_request=original_request,
        )

    def normalize_context_name(self, name: str) -> str:
        return name

    def context_matches(self, context: Context, name: str) -> bool:
        return context.name == name

    def build_context(self, context: Context) -> dict[str, Any]:
        return self._compact(
            {
                "name": context.name,
                "lifespan": context.lifespan_count,
                "parameters": context.parameters,
            }
        )

    def build_followup_event(self, event: FollowupEvent) -> dict[str, Any]:
        return self._compact({"name": event.name, "data": event.parameters})

    def build_message(self, element: BaseResponse) -> dict[str, Any]:
        builders = {
            "text": self._text_message,
            "card": self._card_message,
            "suggestions": self._suggestions_message,
            "image": self._image_message,
            "payload": self._payload_message,
        }
        message = builders[element.type](element)
        message["platform"] = v1_platform_name(element.platform)
        return self._compact(message)

    def _text_message(self, element: Text) -> dict[str, Any]:
        return {"type": TEXT_MESSAGE, "speech": element.text}

    def _card_message(self, element: Card) -> dict[str, Any]:
        buttons = [
            self._compact({"text": button.text, "postback": button.url})
            for button in element.buttons
        ]
        return {
            "type": CARD_MESSAGE,
            "title": element.title,
            "subtitle": element.subtitle,
            "imageUrl": element.image_url,
            "buttons": buttons or None,
        }

    def _suggestions_message(self, element: Suggestions) -> dict[str, Any]:
        return {"type": QUICK_REPLIES_MESSAGE, "replies": list(element.replies)}

    def _image_message(self, element: Image) -> dict[str, Any]:
        return {"type": IMAGE_MESSAGE, "imageUrl": element.image_url}

    def _payload_message(self, element: Payload) -> dict[str, Any]:
        return {"type": PAYLOAD_MESSAGE, "payload": element.payload}

    def build_response(
        self,
        elements: Sequence[BaseResponse],
        followup_event: Optional[FollowupEvent],
        contexts: Sequence[Context],
    ) -> dict[str, Any]:
        response: dict[str, Any] = {}
        speech = self._first_text(elements)
        if speech is not None:
            response["speech"] = speech
            response["displayText"] = speech

        if not self._is_plain_text(elements):
            messages: list[dict[str, Any]] = []
            data: dict[str, Any] = {}
            for element in elements:
                if self._is_raw_payload(element):
                    self._merge_raw_payload(data, element)
                else:
                    messages.append(self.build_message(element))
            if messages:
                response["messages"] = messages
            if data:
                response["data"] = data

        if contexts:
            response["contextOut"] = [self.build_context(ctx) for ctx in contexts]
        if followup_event is not None:
            response["followupEvent"] = self.build_followup_event(followup_event)
        return response
