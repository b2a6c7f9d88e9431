"""
Request normalizer.

Detects which Dialogflow protocol version a webhook body uses and builds the
matching adapter, which reads the body into a RequestModel.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.adapters.v1 import V1Adapter
from fulfillment.adapters.v2 import V2Adapter
from fulfillment.core.host import HostResponse
from fulfillment.errors import RequestConstructionError

logger = logging.getLogger(__name__)

ADAPTERS: dict[int, type[BaseAgentAdapter]] = {1: V1Adapter, 2: V2Adapter}


def detect_protocol_version(body: Mapping[str, Any]) -> int:
    """Return 1 for a ``result`` body, 2 for a ``queryResult`` body."""
    if not isinstance(body, Mapping):
        raise RequestConstructionError("Webhook request body must be a JSON object")
    if isinstance(body.get("result"), Mapping):
        return 1
    if isinstance(body.get("queryResult"), Mapping):
        return 2
    raise RequestConstructionError(
        "Invalid or unknown request type (not a Dialogflow v1 or v2 webhook request)."
    )


def normalize_request(
    body: Mapping[str, Any], host_response: HostResponse
) -> BaseAgentAdapter:
    """Select the adapter for ``body`` and populate its RequestModel."""
    version = detect_protocol_version(body)
    logger.debug("Webhook request version %s", version)
    adapter = ADAPTERS[version](dict(body), host_response)
    request = adapter.request
    logger.debug("Request action=%s source=%s", request.action, request.source)
    return adapter
