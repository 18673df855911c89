"""
Board state management.
Holds the in-memory board, applies every change locally first, and hands the
result to a debounced saver. Persistence failures never undo a local change;
they show up in the sync status instead.
"""
import datetime
import enum
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from choreboard.config import DEFAULT_SAVE_DEBOUNCE_SECONDS
from choreboard.data.gateway import DocumentGateway, PersistenceError, SeedWriteError
from choreboard.domain import board
from choreboard.domain.archive import archive_week, build_week_summary
from choreboard.domain.seed import default_board
from choreboard.domain.sync import DebouncedSaver, SyncStatus
from choreboard.schemas.board import Category, Child

logger = logging.getLogger(__name__)


class ArchivePhase(str, enum.Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    SUMMARY = "summary"


ARCHIVE_IN_PROGRESS = "Week archive in progress"
CHILD_NOT_FOUND = "Child not found"


class BoardService:
    """
    The board as seen by the API.

    Args:
        gateway: Storage backend, or None when configuration is missing
        config_error: Message explaining why gateway is None
        save_delay: Debounce window for saves, in seconds
        today: Clock used for archive labels
    """

    def __init__(
        self,
        gateway: Optional[DocumentGateway],
        config_error: Optional[str] = None,
        save_delay: float = DEFAULT_SAVE_DEBOUNCE_SECONDS,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self._gateway = gateway
        self.config_error = config_error
        self._today = today
        self._lock = threading.RLock()
        self._saver = DebouncedSaver(self._write, save_delay)
        self._load_failed = False

        self.children: List[Child] = []
        self.categories: List[Category] = []
        self.status = SyncStatus.IDLE
        self.error: Optional[str] = None
        self.archive_phase = ArchivePhase.IDLE

    @property
    def persistence_enabled(self) -> bool:
        return self._gateway is not None and not self._load_failed

    # ============================================
    # LOADING AND SAVING
    # ============================================

    def load(self) -> None:
        """
        One-shot load from the backing store.

        Without a gateway the board starts from the default seed with
        persistence disabled. A failed load keeps the board empty and also
        disables persistence so it cannot overwrite the stored document.
        When only storing the default board failed, the defaults are shown
        and the next change retries the write.
        """
        if self._gateway is None:
            seed = default_board()
            with self._lock:
                self.children, self.categories = seed.children, seed.categories
                self.status = SyncStatus.ERROR
                self.error = self.config_error
            logger.warning("Running with local defaults only: %s", self.config_error)
            return

        with self._lock:
            self.status = SyncStatus.LOADING
            self.error = None
        try:
            data = self._gateway.load()
        except SeedWriteError as exc:
            # Nothing is stored yet, so saves stay enabled.
            with self._lock:
                self._load_failed = False
                self.children, self.categories = exc.board.children, exc.board.categories
                self.status = SyncStatus.ERROR
                self.error = str(exc)
            return
        except PersistenceError as exc:
            logger.error("Failed to load board: %s", exc)
            with self._lock:
                self._load_failed = True
                self.status = SyncStatus.ERROR
                self.error = str(exc)
            return

        with self._lock:
            self._load_failed = False
            self.children, self.categories = data.children, data.categories
            self.status = SyncStatus.SAVED
        logger.info("Loaded board: %d children, %d categories", len(data.children), len(data.categories))

    def flush(self) -> None:
        """Write any save still waiting on its debounce timer."""
        self._saver.flush()

    def _commit(self, children: Optional[List[Child]] = None, categories: Optional[List[Category]] = None) -> None:
        """Apply a change locally, then schedule it for persistence."""
        with self._lock:
            if children is not None:
                self.children = children
            if categories is not None:
                self.categories = categories
            if not self.persistence_enabled:
                return
            self.status = SyncStatus.SAVING
        self._saver.schedule()

    def _write(self) -> None:
        with self._lock:
            children, categories = list(self.children), list(self.categories)
        try:
            self._gateway.save(children=children, categories=categories)
        except PersistenceError as exc:
            logger.error("Failed to save board: %s", exc)
            with self._lock:
                self.status = SyncStatus.ERROR
                self.error = str(exc)
            return

        with self._lock:
            if not self._saver.pending:
                self.status = SyncStatus.SAVED
                self.error = None

    # ============================================
    # CHORES
    # ============================================

    def mark_chore(self, child_id: str, category_id: str) -> Tuple[Optional[int], Optional[str]]:
        """
        Add a checkmark. Refused while a week archive is in progress.

        Returns:
            (reward amount when this checkmark reached a higher tier, error message)
        """
        with self._lock:
            if self.archive_phase != ArchivePhase.IDLE:
                return None, ARCHIVE_IN_PROGRESS
            children, reward = board.mark_chore(self.children, self.categories, child_id, category_id)
            if children == self.children:
                return None, None
            self._commit(children=children)
        if reward is not None:
            logger.info("Child %s reached a reward of %s", child_id, reward)
        return reward, None

    def unmark_chore(self, child_id: str, category_id: str) -> Optional[str]:
        with self._lock:
            if self.archive_phase != ArchivePhase.IDLE:
                return ARCHIVE_IN_PROGRESS
            children = board.unmark_chore(self.children, child_id, category_id)
            if children != self.children:
                self._commit(children=children)
        return None

    # ============================================
    # CATEGORIES
    # ============================================

    def add_category(self, name: str) -> Tuple[Optional[Category], Optional[str]]:
        name = (name or "").strip()
        if not name:
            return None, "Category name is required"
        with self._lock:
            if self.archive_phase != ArchivePhase.IDLE:
                return None, ARCHIVE_IN_PROGRESS
            categories, category = board.add_category(self.categories, name)
            self._commit(categories=categories)
        return category, None

    def delete_category(self, category_id: str, confirmed: bool = False) -> Optional[str]:
        """
        Remove a category from the board and from every child's counts.
        Irreversible, so it only happens when `confirmed` is set.

        Returns:
            None if deleted (or unknown id), error message if not confirmed
            or a week archive is in progress
        """
        with self._lock:
            if self.archive_phase != ArchivePhase.IDLE:
                return ARCHIVE_IN_PROGRESS
            category = board.find_category(self.categories, category_id)
            if category is None:
                return None
            if not confirmed:
                return f'Confirm deletion of chore "{category.name}"'
            children, categories = board.delete_category(self.children, self.categories, category_id)
            self._commit(children=children, categories=categories)
        logger.info("Deleted category %s", category_id)
        return None

    # ============================================
    # CHILDREN
    # ============================================

    def update_child(
        self,
        child_id: str,
        name: Optional[str] = None,
        avatar_id: Optional[str] = None,
        total_earnings: Optional[float] = None,
    ) -> Optional[str]:
        with self._lock:
            if board.find_child(self.children, child_id) is None:
                return CHILD_NOT_FOUND
            if self.archive_phase != ArchivePhase.IDLE:
                return ARCHIVE_IN_PROGRESS
            children = board.update_child(self.children, child_id, name, avatar_id, total_earnings)
            if children != self.children:
                self._commit(children=children)
        return None

    # ============================================
    # WEEK ARCHIVE
    # ============================================

    def request_archive(self) -> Optional[str]:
        with self._lock:
            if self.archive_phase != ArchivePhase.IDLE:
                return "Week archive already in progress"
            self.archive_phase = ArchivePhase.CONFIRMING
        return None

    def cancel_archive(self) -> None:
        with self._lock:
            self.archive_phase = ArchivePhase.IDLE

    def confirm_archive(self) -> Tuple[Optional[List[Dict]], Optional[str]]:
        """
        Move to the summary step and return what finalizing would credit.
        Nothing is changed yet, and the board stays frozen until finalize or cancel.
        """
        with self._lock:
            if self.archive_phase != ArchivePhase.CONFIRMING:
                return None, "Week archive has not been requested"
            self.archive_phase = ArchivePhase.SUMMARY
            return build_week_summary(self.children), None

    def finalize_archive(self) -> Tuple[Optional[List[Child]], Optional[str]]:
        """
        Credit weekly earnings, record archive entries, and reset every count.
        The only step of the workflow that changes the board.
        """
        with self._lock:
            if self.archive_phase != ArchivePhase.SUMMARY:
                return None, "Week summary has not been shown"
            children = archive_week(self.children, self._today())
            self.archive_phase = ArchivePhase.IDLE
            self._commit(children=children)
        logger.info("Archived week for %d children", len(children))
        return children, None

    # ============================================
    # STATE
    # ============================================

    def test_connection(self) -> bool:
        return self._gateway is not None and self._gateway.test_connection()

    def connection_info(self) -> Dict:
        """Connectivity plus whatever the backend reports about the stored document."""
        connected = self.test_connection()
        metadata = None
        if connected:
            try:
                metadata = self._gateway.metadata()
            except PersistenceError as exc:
                logger.warning("Failed to read storage metadata: %s", exc)
        return {"connected": connected, "metadata": metadata}

    def snapshot(self) -> Dict:
        with self._lock:
            return {
                "children": list(self.children),
                "categories": list(self.categories),
                "sync": {
                    "status": self.status,
                    "error": self.error,
                    "persistence_enabled": self.persistence_enabled,
                },
                "config_error": self.config_error,
                "archive_phase": self.archive_phase,
            }
