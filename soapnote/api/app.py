"""FastAPI application for SoapNote."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from soapnote import __version__
from soapnote.api.middleware import RequestLoggingMiddleware
from soapnote.api.routes import cpt, health, notes
from soapnote.config import get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="SoapNote API",
        description="Pediatric OT SOAP note composer with CPT billing-time reconciliation",
        version=__version__,
        debug=settings.debug_mode,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(cpt.router, prefix="/api/v1")
    app.include_router(notes.router, prefix="/api/v1")

    logger.info("SoapNote API configured")
    return app
