from typing import Optional

from fastapi import FastAPI

from fulfillment.config import get_settings
from fulfillment.core.app_state import state
from fulfillment.core.registry import HandlerRegistry
from fulfillment.infra.logging_config import LoggingConfig, get_logger
from fulfillment.routers import system, webhooks


def create_app(registry: Optional[HandlerRegistry] = None) -> FastAPI:
    """Build the FastAPI app serving the Dialogflow webhook."""
    settings = get_settings()
    LoggingConfig(settings.log_level)
    logger = get_logger()

    docs_url = "/docs" if settings.expose_docs and not settings.is_production else None
    app = FastAPI(title=settings.app_name, docs_url=docs_url, redoc_url=None)
    app.state.registry = registry if registry is not None else state.registry
    logger.info("Registered Dialogflow actions: %s", app.state.registry.list_actions())

    app.include_router(system.router)
    app.include_router(webhooks.router)
    return app
