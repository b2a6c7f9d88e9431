"""Tests for protocol version detection and adapter selection."""

import pytest

from fulfillment.adapters.v1 import V1Adapter
from fulfillment.adapters.v2 import V2Adapter
from fulfillment.core.host import BufferedResponse
from fulfillment.core.normalizer import detect_protocol_version, normalize_request
from fulfillment.errors import RequestConstructionError
from tests.fixtures.dialogflow_fixtures import v1_request, v2_request


def test_detect_v1():
    assert detect_protocol_version(v1_request()) == 1


def test_detect_v2():
    assert detect_protocol_version(v2_request()) == 2


def test_detect_empty_result_objects():
    assert detect_protocol_version({"result": {}}) == 1
    assert detect_protocol_version({"queryResult": {}}) == 2
    adapter = normalize_request({"queryResult": {}}, BufferedResponse())
    assert adapter.request.action is None
    assert adapter.request.input_contexts == ()


@pytest.mark.parametrize("body", [{}, {"foo": "bar"}, {"result": None}, {"queryResult": "text"}])
def test_detect_unknown_raises(body):
    with pytest.raises(RequestConstructionError, match="not a Dialogflow"):
        detect_protocol_version(body)


def test_detect_non_mapping_raises():
    with pytest.raises(RequestConstructionError):
        detect_protocol_version(["result"])


def test_normalize_request_selects_adapter():
    v1 = normalize_request(v1_request(), BufferedResponse())
    v2 = normalize_request(v2_request(), BufferedResponse())
    assert isinstance(v1, V1Adapter)
    assert v1.request.protocol_version == 1
    assert isinstance(v2, V2Adapter)
    assert v2.request.protocol_version == 2
