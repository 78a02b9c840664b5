"""
Placement Store - the single owner of the aggregate state.

Every mutating registry operation runs inside ``store.transaction()``:

1. take the writer lock (operations never interleave)
2. load the latest persisted state and hand out a deep working copy
3. the operation mutates the copy
4. save() the copy; only then publish it as ``store.state``
5. notify subscribers

If the operation raises, or save() fails, nothing is published, so a failed
write never leaves a half-applied mutation behind.

Backends only implement ``_read`` / ``_write``. See InMemoryStore here and
SqlStore in app/services/sql_store.py.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Iterator, List

from app.core.errors import StorageError
from app.schemas.schemas import PlacementState

logger = logging.getLogger(__name__)

Listener = Callable[[PlacementState], None]


class PlacementStore(ABC):
    """Base store. Subclasses provide persistence."""

    def __init__(self):
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._working: PlacementState = None
        self.state: PlacementState = PlacementState()

    # ----------------------------------------------------------
    # Persistence contract
    # ----------------------------------------------------------

    @abstractmethod
    def _read(self) -> PlacementState:
        ...

    @abstractmethod
    def _write(self, state: PlacementState) -> None:
        ...

    def load(self) -> PlacementState:
        """Read the persisted state. I/O failures surface as StorageError."""
        try:
            return self._read()
        except StorageError:
            raise
        except Exception as e:
            logger.error("Failed to load placement state: %s", e)
            raise StorageError(f"load failed: {e}") from e

    def save(self, state: PlacementState) -> None:
        try:
            self._write(state)
        except StorageError:
            raise
        except Exception as e:
            logger.error("Failed to save placement state: %s", e)
            raise StorageError(f"save failed: {e}") from e

    def refresh(self) -> PlacementState:
        """Re-read the persistence layer and publish it (no notification)."""
        with self._lock:
            self.state = self.load()
            return self.state

    # ----------------------------------------------------------
    # Transactions
    # ----------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[PlacementState]:
        """
        Yield a working copy of the latest state; commit it on clean exit.

        Nested calls join the outer transaction and share its working copy.
        """
        with self._lock:
            if self._working is not None:
                yield self._working
                return

            working = self.load().model_copy(deep=True)
            self._working = working
            try:
                yield working
                self.save(working)
            finally:
                self._working = None

            self.state = working
            self._notify(working)

    def read(self) -> PlacementState:
        """Current state for read-only queries (the in-flight copy inside a transaction)."""
        with self._lock:
            return self._working if self._working is not None else self.state

    # ----------------------------------------------------------
    # Change notification
    # ----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback fired after each committed mutation. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: PlacementState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Store listener %r failed", listener)


class InMemoryStore(PlacementStore):
    """Process-local store. Default backend and the one tests use."""

    def __init__(self, initial: PlacementState = None):
        super().__init__()
        self._snapshot = (initial or PlacementState()).model_copy(deep=True)
        self.state = self._snapshot.model_copy(deep=True)

    def _read(self) -> PlacementState:
        return self._snapshot.model_copy(deep=True)

    def _write(self, state: PlacementState) -> None:
        self._snapshot = state.model_copy(deep=True)
