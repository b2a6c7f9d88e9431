"""Tests for V1Adapter."""

import pytest

from fulfillment.adapters.v1 import V1Adapter
from fulfillment.core.host import BufferedResponse
from fulfillment.errors import RequestConstructionError
from fulfillment.schemas.platforms import Platform
from fulfillment.schemas.request import Context, FollowupEvent
from fulfillment.schemas.responses import Card, Image, Payload, Suggestions, Text
from tests.fixtures.dialogflow_fixtures import v1_request


@pytest.fixture
def adapter():
    return V1Adapter(v1_request(source="slack"), BufferedResponse())


def test_process_request(adapter):
    request = adapter.process_request()
    assert request.protocol_version == 1
    assert request.action == "weather.get"
    assert request.parameters == {"city": "Rome"}
    assert request.source is Platform.SLACK
    assert request.query == "weather in Rome"
    assert request.locale == "en"
    assert request.session == "1234"
    assert request.intent == "weather"
    assert request.original_request == {"source": "slack", "data": {}}


def test_process_request_invalid_context_raises():
    adapter = V1Adapter(v1_request(contexts=[{"lifespan": 1}]), BufferedResponse())
    with pytest.raises(RequestConstructionError):
        adapter.process_request()


def test_plain_text_response(adapter):
    payload = adapter.build_response([Text(text="hi")], None, [])
    assert payload == {"speech": "hi", "displayText": "hi"}


def test_rich_messages(adapter):
    elements = [
        Text(text="hi"),
        Card(title="Weather", subtitle="Rome", image_url="https://x/i.png").add_button(
            "More", "https://x"
        ),
        Suggestions(replies=["a", "b"], platform=Platform.SLACK),
        Image(image_url="https://x/i.png"),
        Payload(platform=Platform.FACEBOOK, payload={"attachment": {}}),
    ]
    payload = adapter.build_response(elements, None, [])
    assert payload["speech"] == "hi"
    assert payload["messages"] == [
        {"type": 0, "speech": "hi"},
        {
            "type": 1,
            "title": "Weather",
            "subtitle": "Rome",
            "imageUrl": "https://x/i.png",
            "buttons": [{"text": "More", "postback": "https://x"}],
        },
        {"type": 2, "replies": ["a", "b"], "platform": "slack"},
        {"type": 3, "imageUrl": "https://x/i.png"},
        {"type": 4, "payload": {"attachment": {}}, "platform": "facebook"},
    ]
    assert "data" not in payload


def test_google_payload_goes_to_data(adapter):
    elements = [
        Text(text="hi"),
        Payload(platform=Platform.ACTIONS_ON_GOOGLE, payload={"expectUserResponse": True}),
    ]
    payload = adapter.build_response(elements, None, [])
    assert payload["data"] == {"google": {"expectUserResponse": True}}
    assert payload["messages"] == [{"type": 0, "speech": "hi"}]


def test_contexts_and_followup(adapter):
    contexts = [Context(name="weather", lifespan_count=2, parameters={"city": "Rome"})]
    event = FollowupEvent(name="check", parameters={"x": 1})
    payload = adapter.build_response([], event, contexts)
    assert payload == {
        "contextOut": [{"name": "weather", "lifespan": 2, "parameters": {"city": "Rome"}}],
        "followupEvent": {"name": "check", "data": {"x": 1}},
    }


def test_send_response_writes_to_host():
    response = BufferedResponse()
    adapter = V1Adapter(v1_request(), response)
    adapter.send_response([Text(text="hi")], None, [])
    assert response.sent is True
    assert response.payload == {"speech": "hi", "displayText": "hi"}
