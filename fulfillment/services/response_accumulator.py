"""Ordered accumulation of rich response elements for one webhook request."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, TypeVar, Union

from fulfillment.errors import UnknownResponseTypeError, UnsupportedPlatformError
from fulfillment.schemas.platforms import (
    Platform,
    PlatformTag,
    is_supported_source,
    is_unspecified,
)
from fulfillment.schemas.responses import (
    RESPONSE_TYPES,
    BaseResponse,
    Payload,
    ResponseElement,
    Suggestions,
    Text,
)

logger = logging.getLogger(__name__)

ResponseInput = Union[str, ResponseElement]
_R = TypeVar("_R", bound=BaseResponse)

# Actions on Google requires a simple response before any rich response.
LEADING_TEXT = " "


class ResponseAccumulator:
    """
    Append-only list of response elements with per-platform suggestion merging.

    Suggestions added for a platform that already has a Suggestions element
    are appended to that element's replies instead of creating a second one.
    Every other element is appended as is.
    """

    def __init__(self) -> None:
        self._elements: list[BaseResponse] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[BaseResponse]:
        return iter(tuple(self._elements))

    @property
    def elements(self) -> tuple[BaseResponse, ...]:
        return tuple(self._elements)

    def add(self, response: ResponseInput) -> "ResponseAccumulator":
        """Add a string (as Text) or a response element."""
        response = self._coerce(response)
        if isinstance(response, Suggestions):
            existing = self.existing_suggestion(response.platform)
            if existing is not None:
                existing.replies.extend(response.replies)
                return self
        self._elements.append(response)
        return self

    def extend(self, responses: Iterable[ResponseInput]) -> "ResponseAccumulator":
        """Add every item, or none of them if any item is not a response."""
        for response in [self._coerce(r) for r in responses]:
            self.add(response)
        return self

    @staticmethod
    def _coerce(response: ResponseInput) -> BaseResponse:
        if isinstance(response, str):
            response = Text(text=response)
        if not isinstance(response, RESPONSE_TYPES):
            raise UnknownResponseTypeError(response)
        return response

    def existing_suggestion(
        self, platform: Optional[PlatformTag] = None
    ) -> Optional[Suggestions]:
        return self._find(Suggestions, platform)

    def existing_payload(self, platform: Optional[PlatformTag] = None) -> Optional[Payload]:
        return self._find(Payload, platform)

    def _find(self, kind: type[_R], platform: Optional[PlatformTag]) -> Optional[_R]:
        for element in self._elements:
            if not isinstance(element, kind):
                continue
            if is_unspecified(element.platform) and is_unspecified(platform):
                return element
            if element.platform == platform:
                return element
        return None

    def validate_platform(self, source: Optional[PlatformTag]) -> None:
        if not is_supported_source(source):
            raise UnsupportedPlatformError(source)

    def apply_leading_text(self, source: Optional[PlatformTag]) -> bool:
        """
        Prepend a blank Text for Actions on Google when the first element is rich.

        Skipped when a Payload for Actions on Google is present, since that
        payload carries its own simple response. Returns True if inserted.
        """
        if source != Platform.ACTIONS_ON_GOOGLE or not self._elements:
            return False
        if isinstance(self._elements[0], Text):
            return False
        if self.existing_payload(Platform.ACTIONS_ON_GOOGLE) is not None:
            return False
        self._elements.insert(0, Text(text=LEADING_TEXT))
        logger.debug("Inserted leading text response for Actions on Google")
        return True

    def drain(self) -> list[BaseResponse]:
        """Return the accumulated elements and reset the accumulator."""
        elements, self._elements = self._elements, []
        return elements
