"""
Rich response elements.

Handlers build these and hand them to the WebhookClient; the version adapters
turn them into v1 or v2 wire messages. The set of variants is closed and
discriminated on ``type``; ``ResponseElement`` is that union, usable with
pydantic's ``TypeAdapter`` to build elements from plain dicts.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from fulfillment.schemas.platforms import Platform


class BaseResponse(BaseModel):
    """Fields shared by every rich response element."""

    type: str
    platform: Platform = Platform.UNSPECIFIED


class Text(BaseResponse):
    type: Literal["text"] = "text"
    text: str


class CardButton(BaseModel):
    text: str
    url: Optional[str] = None


class Card(BaseResponse):
    type: Literal["card"] = "card"
    title: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    buttons: list[CardButton] = Field(default_factory=list)

    def add_button(self, text: str, url: Optional[str] = None) -> "Card":
        self.buttons.append(CardButton(text=text, url=url))
        return self


class Image(BaseResponse):
    type: Literal["image"] = "image"
    image_url: str


class Suggestions(BaseResponse):
    """Quick-reply chips. Merged per platform when added to a response."""

    type: Literal["suggestions"] = "suggestions"
    replies: list[str] = Field(default_factory=list)

    @field_validator("replies", mode="before")
    @classmethod
    def _wrap_single_reply(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    def add_reply(self, reply: str) -> "Suggestions":
        self.replies.append(reply)
        return self


class Payload(BaseResponse):
    """
    Platform-specific custom payload, passed through verbatim.

    ``raw_payload`` routes the payload to the response's top-level platform
    data instead of the message list; Actions on Google payloads always go
    there.
    """

    type: Literal["payload"] = "payload"
    payload: dict[str, Any] = Field(default_factory=dict)
    raw_payload: bool = False


ResponseElement = Annotated[
    Union[Text, Card, Image, Suggestions, Payload],
    Field(discriminator="type"),
]

RESPONSE_TYPES: tuple[type[BaseResponse], ...] = (Text, Card, Image, Suggestions, Payload)
