"""
JSONBin.io storage backend.

The board document is the bin's record. Reads use GET <bin>/latest, writes
replace the whole record with PUT and are retried a bounded number of times.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from choreboard.config import (
    JSONBIN_BASE_URL,
    JSONBIN_LOAD_TIMEOUT,
    JSONBIN_RETRY_DELAY,
    JSONBIN_SAVE_RETRIES,
    JSONBIN_SAVE_TIMEOUT,
)
from choreboard.data.gateway import DocumentGateway, PersistenceError

logger = logging.getLogger(__name__)


def _error_message(response: requests.Response) -> str:
    """Prefer the API's own message over the bare status line."""
    message = f"HTTP {response.status_code}: {response.reason}"
    try:
        payload = response.json()
    except ValueError:
        return message
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return message


class JsonBinGateway(DocumentGateway):
    name = "jsonbin"

    def __init__(
        self,
        bin_id: str,
        api_key: str,
        session: Optional[requests.Session] = None,
        retries: int = JSONBIN_SAVE_RETRIES,
        retry_delay: float = JSONBIN_RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        base_url: str = JSONBIN_BASE_URL,
    ):
        super().__init__()
        self.bin_url = f"{base_url}/{bin_id}"
        self._api_key = api_key
        self._session = session or requests.Session()
        self._retries = retries
        self._retry_delay = retry_delay
        self._sleep = sleep

    def fetch_document(self) -> Optional[Dict[str, Any]]:
        try:
            response = self._session.get(
                f"{self.bin_url}/latest",
                headers={"X-Master-Key": self._api_key, "Content-Type": "application/json"},
                timeout=JSONBIN_LOAD_TIMEOUT,
            )
        except requests.exceptions.Timeout as exc:
            raise PersistenceError("Timed out loading board data") from exc
        except requests.exceptions.RequestException as exc:
            raise PersistenceError(f"Failed to load board data: {exc}") from exc

        if response.status_code == 404:
            return None
        if not response.ok:
            raise PersistenceError(_error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise PersistenceError("JSONBin returned an unreadable response") from exc

        record = payload.get("record") if isinstance(payload, dict) else None
        return record or None

    def write_document(self, document: Dict[str, Any]) -> None:
        attempts = self._retries + 1
        last_error = None
        for attempt in range(attempts):
            try:
                self._put(document)
                return
            except PersistenceError as exc:
                last_error = exc
                if attempt < self._retries:
                    logger.warning(
                        "Save attempt %d failed (%s), retrying in %ss", attempt + 1, exc, self._retry_delay
                    )
                    self._sleep(self._retry_delay)

        raise PersistenceError(f"Save failed after {attempts} attempts: {last_error}")

    def _put(self, document: Dict[str, Any]) -> None:
        try:
            response = self._session.put(
                self.bin_url,
                json=document,
                headers={
                    "Content-Type": "application/json",
                    "X-Master-Key": self._api_key,
                    "X-Bin-Versioning": "false",
                },
                timeout=JSONBIN_SAVE_TIMEOUT,
            )
        except requests.exceptions.Timeout as exc:
            raise PersistenceError("Timed out saving board data") from exc
        except requests.exceptions.RequestException as exc:
            raise PersistenceError(str(exc)) from exc

        if not response.ok:
            raise PersistenceError(_error_message(response))

    def metadata(self) -> Dict[str, Any]:
        """Bin metadata (id, creation and update times) from JSONBin."""
        try:
            response = self._session.get(
                f"{self.bin_url}/meta", headers={"X-Master-Key": self._api_key}, timeout=JSONBIN_LOAD_TIMEOUT
            )
        except requests.exceptions.RequestException as exc:
            raise PersistenceError(f"Failed to fetch bin metadata: {exc}") from exc
        if not response.ok:
            raise PersistenceError(f"Failed to fetch bin metadata: {_error_message(response)}")
        return response.json()
