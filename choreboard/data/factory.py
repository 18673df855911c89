import logging
from typing import Optional, Tuple

from choreboard.config import BACKEND_JSONBIN, BACKEND_SQLITE, Settings
from choreboard.data.gateway import DocumentGateway, PersistenceError
from choreboard.data.jsonbin import JsonBinGateway
from choreboard.data.sql_store import SqlDocumentGateway

logger = logging.getLogger(__name__)

MISSING_JSONBIN_CONFIG = "Missing configuration. Set JSONBIN_BIN_ID and JSONBIN_API_KEY."


def build_gateway(settings: Settings) -> Tuple[Optional[DocumentGateway], Optional[str]]:
    """
    Create the storage backend named by the settings.

    Returns:
        (gateway, None) on success, or (None, message) when the backend
        cannot be used; the message is shown to the user as a configuration error.
    """
    if settings.backend == BACKEND_JSONBIN:
        if not settings.jsonbin_configured:
            logger.warning(MISSING_JSONBIN_CONFIG)
            return None, MISSING_JSONBIN_CONFIG
        return JsonBinGateway(settings.jsonbin_bin_id, settings.jsonbin_api_key), None

    if settings.backend == BACKEND_SQLITE:
        try:
            return SqlDocumentGateway.from_url(settings.database_url), None
        except PersistenceError as exc:
            logger.error("SQL storage unavailable: %s", exc)
            return None, f"Database unavailable. Check CHOREBOARD_DATABASE_URL. ({exc})"

    message = f"Unknown storage backend '{settings.backend}'. Set CHOREBOARD_BACKEND to 'sqlite' or 'jsonbin'."
    logger.warning(message)
    return None, message
