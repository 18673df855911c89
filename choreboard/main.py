"""
FastAPI application entry point for the chore board.
Builds the storage backend and suggestion client from settings, loads the
board once at startup, and flushes pending saves at shutdown.

Run with the factory so nothing is built at import time:
    uvicorn choreboard.main:create_app --factory
"""
import logging
from typing import Optional

from fastapi import FastAPI

from choreboard.api import board, child, state
from choreboard.config import Settings, load_settings
from choreboard.data.factory import build_gateway
from choreboard.data.gateway import DocumentGateway
from choreboard.domain.services import BoardService
from choreboard.services.suggestion import ChoreSuggester

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[DocumentGateway] = None,
    suggester: Optional[ChoreSuggester] = None,
) -> FastAPI:
    """
    Create the application.

    Args:
        settings: Runtime settings (read from the environment when omitted)
        gateway: Storage backend (built from settings when omitted)
        suggester: Suggestion client (built from settings when omitted)
    """
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_error = None
    if gateway is None:
        gateway, config_error = build_gateway(settings)

    app = FastAPI(title="Chore Board")
    app.state.board = BoardService(gateway, config_error=config_error, save_delay=settings.save_debounce_seconds)
    app.state.suggester = suggester or ChoreSuggester(settings.openai_api_key, settings.suggestion_model)

    # Public board state, child checkmarks, and board management
    app.include_router(state.router)
    app.include_router(child.router)
    app.include_router(board.router)

    @app.on_event("startup")
    def on_startup() -> None:
        """Load the board from storage (or fall back to local defaults)."""
        app.state.board.load()

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        """Write any change still waiting on the save debounce."""
        app.state.board.flush()

    return app
