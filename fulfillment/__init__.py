"""Dialogflow v1/v2 fulfillment webhooks with rich responses."""

from fulfillment.core.host import BufferedResponse, JSONRequest
from fulfillment.core.registry import HandlerRegistry
from fulfillment.core.webhook_client import WebhookClient
from fulfillment.schemas.platforms import SUPPORTED_RICH_MESSAGE_PLATFORMS, Platform
from fulfillment.schemas.request import Context, FollowupEvent
from fulfillment.schemas.responses import (
    Card,
    CardButton,
    Image,
    Payload,
    Suggestions,
    Text,
)

__all__ = [
    "BufferedResponse",
    "Card",
    "CardButton",
    "Context",
    "FollowupEvent",
    "HandlerRegistry",
    "Image",
    "JSONRequest",
    "Payload",
    "Platform",
    "SUPPORTED_RICH_MESSAGE_PLATFORMS",
    "Suggestions",
    "Text",
    "WebhookClient",
]
