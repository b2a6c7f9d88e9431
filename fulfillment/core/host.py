"""
Host framework boundary.

The core only needs the parsed request body and a response channel it can
set a status on and send a payload through. Any HTTP framework can provide
these; the FastAPI command uses ``JSONRequest`` and ``BufferedResponse``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol


class HostRequest(Protocol):
    body: dict[str, Any]


class HostResponse(Protocol):
    def status(self, code: int) -> "HostResponse": ...
    def send(self, payload: dict[str, Any]) -> None: ...


@dataclass
class JSONRequest:
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class BufferedResponse:
    """Collects the status and payload so the host can write them afterwards."""

    status_code: int = 200
    payload: Optional[dict[str, Any]] = None
    sent: bool = False

    def status(self, code: int) -> "BufferedResponse":
        self.status_code = code
        return self

    def send(self, payload: dict[str, Any]) -> None:
        if self.sent:
            raise RuntimeError("Response has already been sent")
        self.payload = payload
        self.sent = True
