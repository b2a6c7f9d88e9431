"""Tests for webhook routes."""

import pytest
from fastapi.testclient import TestClient

from fulfillment.core.registry import HandlerRegistry
from fulfillment.main import create_app
from fulfillment.schemas.responses import Suggestions
from tests.fixtures.dialogflow_fixtures import SESSION, v1_request, v2_request


@pytest.fixture
def registry():
    registry = HandlerRegistry()

    @registry.action("weather.get")
    async def weather(agent):
        agent.add(f"It is sunny in {agent.parameters['city']}.")
        agent.add(Suggestions(replies=["Tomorrow"]))
        agent.set_context({"name": "weather", "lifespan": 2})

    return registry


@pytest.fixture
def client(registry):
    app = create_app(registry=registry)
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_dialogflow_webhook_v2(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json=v2_request())
    assert resp.status_code == 200
    assert resp.json() == {
        "fulfillmentMessages": [
            {"text": {"text": ["It is sunny in Rome."]}},
            {"quickReplies": {"quickReplies": ["Tomorrow"]}},
        ],
        "outputContexts": [{"name": f"{SESSION}/contexts/weather", "lifespanCount": 2}],
    }


def test_dialogflow_webhook_v1(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json=v1_request())
    assert resp.status_code == 200
    body = resp.json()
    assert body["speech"] == "It is sunny in Rome."
    assert body["contextOut"] == [{"name": "weather", "lifespan": 2}]


def test_dialogflow_webhook_no_handler(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json=v2_request(action="unknown"))
    assert resp.status_code == 400
    assert resp.json() == {"detail": "No handler for requested action"}


def test_dialogflow_webhook_unknown_body(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json={"update_id": 1})
    assert resp.status_code == 400


def test_dialogflow_webhook_invalid_json(client: TestClient):
    resp = client.post(
        "/webhooks/dialogflow",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid JSON body"}


def test_dialogflow_webhook_non_object_body(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json=["result"])
    assert resp.status_code == 400


def test_dialogflow_webhook_unsupported_platform(client: TestClient):
    resp = client.post("/webhooks/dialogflow", json=v2_request(source="myspace"))
    assert resp.status_code == 400


def test_dialogflow_webhook_handler_reads_headers():
    registry = HandlerRegistry()

    @registry.action("weather.get")
    def weather(agent):
        agent.add(f"token={agent.headers.get('x-agent-token')}")

    with TestClient(create_app(registry=registry)) as c:
        resp = c.post(
            "/webhooks/dialogflow",
            json=v2_request(),
            headers={"X-Agent-Token": "secret"},
        )
    assert resp.status_code == 200
    assert resp.json() == {"fulfillmentText": "token=secret"}


def test_create_app_logs_registered_actions(registry, caplog):
    with caplog.at_level("INFO", logger="fulfillment"):
        create_app(registry=registry)
    assert "Registered Dialogflow actions: ['weather.get']" in caplog.text
