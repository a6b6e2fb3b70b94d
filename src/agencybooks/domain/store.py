"""Shared persistence plumbing for the in-memory stores."""

import threading
from typing import Callable, Optional

from agencybooks.domain.errors import PersistenceError
from agencybooks.utils.logging import get_logger

LOGGER = get_logger(__name__)


class SnapshotStore:
    """Base for stores that own a collection and save it after each change.

    Mutations and snapshot reads run under ``_lock``. Saves are best effort:
    a PersistenceError is logged and kept on ``last_save_error`` but the
    in-memory change stands.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.last_save_error: Optional[PersistenceError] = None

    def _save(self, what: str, write: Callable[[], None]) -> bool:
        """Run ``write`` and record the outcome; returns True on success."""
        try:
            write()
        except PersistenceError as exc:
            LOGGER.error("Failed to save %s: %s", what, exc)
            self.last_save_error = exc
            return False
        self.last_save_error = None
        return True
