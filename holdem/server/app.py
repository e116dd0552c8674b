"""
FastAPI Application Entry Point for Holdem.

This module creates and configures the FastAPI application with:
- HTTP routes for the single table
- The table session and its settings store on ``app.state``
- CORS middleware for development
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from holdem import __version__
from holdem.server.routes import router
from holdem.server.session import TableSession
from holdem.server.settings import SettingsStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SETTINGS_ENV = "HOLDEM_SETTINGS"


def create_app(settings_path: Optional[str] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings_path: JSON settings file; falls back to $HOLDEM_SETTINGS

    Returns:
        Configured FastAPI application instance
    """
    store = SettingsStore(settings_path or os.environ.get(SETTINGS_ENV))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Holdem server starting up...")
        yield
        await app.state.session.cancel_agents()
        logger.info("Holdem server shutting down...")

    app = FastAPI(
        title="Holdem",
        description="Single-table Texas Hold'em engine with rule-based opponents",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings_store = store
    app.state.session = TableSession(store.load())

    app.include_router(router)
    return app


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "holdem.server.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
