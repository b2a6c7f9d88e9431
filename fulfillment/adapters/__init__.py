"""Dialogflow protocol adapters."""

from fulfillment.adapters.base import BaseAgentAdapter
from fulfillment.adapters.v1 import V1Adapter
from fulfillment.adapters.v2 import V2Adapter

__all__ = ["BaseAgentAdapter", "V1Adapter", "V2Adapter"]
