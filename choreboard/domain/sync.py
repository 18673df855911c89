"""
Save scheduling.
Coalesces bursts of board mutations into a single persisted write.
"""
import enum
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class SyncStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class DebouncedSaver:
    """
    Runs `write` once the board has been quiet for `delay` seconds.

    Each call to schedule() cancels the pending timer and starts a new one.
    Writes never overlap; a timer that was superseded while waiting for the
    previous write to finish does nothing, the newer timer writes instead.
    A delay of 0 writes immediately on the calling thread.
    """

    def __init__(self, write: Callable[[], None], delay: float):
        self._write = write
        self._delay = delay
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._state_lock = threading.Lock()
        self._write_lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._state_lock:
            return self._timer is not None

    def schedule(self) -> None:
        with self._state_lock:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            if self._delay > 0:
                self._timer = threading.Timer(self._delay, self._fire, args=(generation,))
                self._timer.daemon = True
                self._timer.start()
        if self._delay <= 0:
            self._fire(generation)

    def flush(self) -> None:
        """Write now if a save is waiting on its timer."""
        with self._state_lock:
            if self._timer is None:
                return
            self._timer.cancel()
            self._timer = None
            self._generation += 1
            generation = self._generation
        logger.debug("Flushing pending save")
        self._fire(generation)

    def cancel(self) -> None:
        with self._state_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._write_lock:
            with self._state_lock:
                if generation != self._generation:
                    return
                self._timer = None
            self._write()
