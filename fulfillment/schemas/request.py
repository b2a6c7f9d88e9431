"""
Normalized request contracts.

Both Dialogflow protocol versions are converted into ``RequestModel`` by the
version adapters. Contexts and followup events share one shape across
versions; the adapters own the wire field names.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from fulfillment.schemas.platforms import PlatformTag


class Context(BaseModel):
    """Dialogflow context. v2 names are ``<session>/contexts/<short name>`` paths."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    lifespan_count: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("lifespan_count", "lifespanCount", "lifespan"),
    )
    parameters: Optional[dict[str, Any]] = None

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("context name must not be empty")
        return value

    @property
    def short_name(self) -> str:
        return self.name.rsplit("/", 1)[-1]


class FollowupEvent(BaseModel):
    """Event Dialogflow triggers after this response (at most one per request)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    parameters: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("parameters", "data")
    )
    language_code: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("language_code", "languageCode")
    )

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("followup event name must not be empty")
        return value


class RequestModel(BaseModel):
    """Normalized webhook request. Built once per request and never mutated."""

    model_config = ConfigDict(frozen=True)

    protocol_version: Literal[1, 2]
    action: Optional[str] = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    input_contexts: tuple[Context, ...] = ()
    source: Optional[PlatformTag] = None
    query: Optional[str] = None
    locale: Optional[str] = None
    session: Optional[str] = None
    intent: Optional[str] = None
    original_request: Optional[dict[str, Any]] = None
