"""
Dialogflow v2 webhook adapter.

Requests carry a top-level ``queryResult``; responses use
``fulfillmentText``, ``fulfillmentMessages``, ``outputContexts`` and
``followupEventInput``. Context names are full session paths.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.schemas.platforms import is_unspecified, platform_from_source
from fulfillment.schemas.request import Context, FollowupEvent, RequestModel
from fulfillment.schemas.responses import (
    BaseResponse,
    Card,
    Image,
    Payload,
    Suggestions,
    Text,
)

logger = logging.getLogger(__name__)

CONTEXTS_SEGMENT = "/contexts/"


class V2Adapter(BaseAgentAdapter):
    """Dialogflow v2 adapter: context names are rewritten to session paths."""

    protocol_version = 2

    def process_request(self) -> RequestModel:
        query_result = self._body.get("queryResult") or {}
        original_request = self._body.get("originalDetectIntentRequest")
        source = original_request.get("source") if original_request else None
        intent = query_result.get("intent") or {}
        return RequestModel(
            protocol_version=2,
            action=query_result.get("action") or None,
            parameters=query_result.get("parameters") or {},
            input_contexts=self._parse_contexts(query_result.get("outputContexts")),
            source=platform_from_source(source),
            query=query_result.get("queryText"),
            locale=query_result.get("languageCode"),
            session=self._body.get("session"),
            intent=intent.get("displayName"),
            original_request=original_request,
        )

    def normalize_context_name(self, name: str) -> str:
        session = self.request.session
        if "/" in name:
            return name
        if not session:
            logger.debug("No session on request, keeping short context name %s", name)
            return name
        return f"{session}{CONTEXTS_SEGMENT}{name}"

    def context_matches(self, context: Context, name: str) -> bool:
        # Suffix match on a path segment: "…/contexts/foo" and "foo", not "foobar".
        return context.name == name or context.name.endswith(f"/{name}")

    def set_followup_event(self, event: FollowupEvent) -> FollowupEvent:
        if event.language_code is None and self.request.locale:
            return event.model_copy(update={"language_code": self.request.locale})
        return event

    def build_context(self, context: Context) -> dict[str, Any]:
        return self._compact(
            {
                "name": context.name,
                "lifespanCount": context.lifespan_count,
                "parameters": context.parameters,
            }
        )

    def build_followup_event(self, event: FollowupEvent) -> dict[str, Any]:
        return self._compact(
            {
                "name": event.name,
                "parameters": event.parameters,
                "languageCode": event.language_code,
            }
        )

    def build_message(self, element: BaseResponse) -> dict[str, Any]:
        builders = {
            "text": self._text_message,
            "card": self._card_message,
            "suggestions": self._suggestions_message,
            "image": self._image_message,
            "payload": self._payload_message,
        }
        message = builders[element.type](element)
        if not is_unspecified(element.platform):
            message["platform"] = element.platform.value
        return message

    def _text_message(self, element: Text) -> dict[str, Any]:
        return {"text": {"text": [element.text]}}

    def _card_message(self, element: Card) -> dict[str, Any]:
        card = self._compact(
            {
                "title": element.title,
                "subtitle": element.subtitle,
                "imageUri": element.image_url,
            }
        )
        if element.buttons:
            card["buttons"] = [
                self._compact({"text": button.text, "postback": button.url})
                for button in element.buttons
            ]
        return {"card": card}

    def _suggestions_message(self, element: Suggestions) -> dict[str, Any]:
        return {"quickReplies": {"quickReplies": list(element.replies)}}

    def _image_message(self, element: Image) -> dict[str, Any]:
        return {"image": {"imageUri": element.image_url}}

    def _payload_message(self, element: Payload) -> dict[str, Any]:
        return {"payload": element.payload}

    def build_response(
        self,
        elements: Sequence[BaseResponse],
        followup_event: Optional[FollowupEvent],
        contexts: Sequence[Context],
    ) -> dict[str, Any]:
        response: dict[str, Any] = {}
        if self._is_plain_text(elements):
            response["fulfillmentText"] = elements[0].text
        else:
            messages: list[dict[str, Any]] = []
            payload: dict[str, Any] = {}
            for element in elements:
                if self._is_raw_payload(element):
                    self._merge_raw_payload(payload, element)
                else:
                    messages.append(self.build_message(element))
            if messages:
                response["fulfillmentMessages"] = messages
            if payload:
                response["payload"] = payload

        if contexts:
            response["outputContexts"] = [self.build_context(ctx) for ctx in contexts]
        if followup_event is not None:
            response["followupEventInput"] = self.build_followup_event(followup_event)
        return response
