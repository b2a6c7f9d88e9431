"""Tests for request, context and followup event schemas."""

import pytest
from pydantic import ValidationError

from fulfillment.schemas.request import Context, FollowupEvent, RequestModel


def test_context_accepts_wire_aliases():
    assert Context.model_validate({"name": "a", "lifespan": 2}).lifespan_count == 2
    assert Context.model_validate({"name": "a", "lifespanCount": 3}).lifespan_count == 3
    assert Context(name="a", lifespan_count=4).lifespan_count == 4


def test_context_short_name():
    assert Context(name="projects/p/agent/sessions/s/contexts/weather").short_name == "weather"
    assert Context(name="weather").short_name == "weather"


def test_context_requires_name():
    with pytest.raises(ValidationError):
        Context(name="")


def test_followup_event_aliases():
    event = FollowupEvent.model_validate({"name": "ev", "data": {"a": 1}})
    assert event.parameters == {"a": 1}


def test_request_model_is_frozen():
    request = RequestModel(protocol_version=2, action="x")
    with pytest.raises(ValidationError):
        request.action = "y"
