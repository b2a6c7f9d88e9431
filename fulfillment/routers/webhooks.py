"""
Webhook routes for Dialogflow fulfillment.

Dialogflow POSTs v1 or v2 webhook requests here; the registered handler for
the request's action builds the response.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from fulfillment.commands.webhooks.dialogflow_command import DialogflowWebhookCommand
from fulfillment.core.app_state import state
from fulfillment.infra.logging_config import get_logger

logger = get_logger("webhooks")

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/dialogflow")
async def dialogflow_webhook(request: Request) -> JSONResponse:
    """Receive a Dialogflow fulfillment request and return the handler's response."""
    try:
        body: Any = await request.json()
    except ValueError as e:
        logger.warning("Dialogflow webhook invalid JSON: %s", e)
        raise HTTPException(status_code=400, detail="Invalid JSON body") from e
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Body must be a JSON object")

    registry = getattr(request.app.state, "registry", state.registry)
    command = DialogflowWebhookCommand(registry)
    status_code, payload = await command.execute(body, dict(request.headers))
    return JSONResponse(status_code=status_code, content=payload)
