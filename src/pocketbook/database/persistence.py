"""Asynchronous persistence of the state document.

PersistenceAdapter is the only code that talks to the storage on behalf of
the application. It never raises: storage that cannot be opened, a failed
load and a failed save are all logged and degrade to "no durability" rather
than breaking the in-memory state.

DebouncedSaver coalesces bursts of state changes into a single write after a
quiet period. A pending write is cancelled and rescheduled on every change,
so only the last state standing is written.
"""

import asyncio
import json
from typing import Callable, Optional

import structlog

from pocketbook.database.base import StateStorage
from pocketbook.domain import actions
from pocketbook.domain.documents import state_to_document
from pocketbook.domain.entities import AppState
from pocketbook.domain.migration import normalize_document
from pocketbook.domain.store import AppStore

logger = structlog.get_logger(__name__)

STATE_KEY = "current_state"
DEFAULT_SAVE_DELAY = 1.0


class PersistenceAdapter:
    """Loads and saves the whole AppState under a single storage key."""

    def __init__(self, storage: StateStorage, key: str = STATE_KEY):
        """Initialize the adapter.

        Args:
            storage: Key-value storage backend
            key: Key the document is stored under
        """
        self.storage = storage
        self.key = key
        self.available: Optional[bool] = None

    def _open(self) -> None:
        self.storage.connect()
        self.storage.initialize_schema()

    async def open(self) -> bool:
        """Open the storage and create its schema on first use.

        Returns:
            True if the storage is usable. The outcome of the first attempt
            is remembered, so later calls do not retry.
        """
        if self.available is not None:
            return self.available
        try:
            await asyncio.to_thread(self._open)
        except Exception:
            logger.exception("storage_unavailable", key=self.key)
            self.available = False
        else:
            self.available = True
        return self.available

    async def close(self) -> None:
        """Release storage resources."""
        if self.available:
            try:
                await asyncio.to_thread(self.storage.disconnect)
            except Exception:
                logger.exception("storage_close_failed", key=self.key)

    async def save(self, state: AppState) -> None:
        """Write the state document. Failures are logged, never raised."""
        if not await self.open():
            logger.warning("state_save_skipped", reason="storage unavailable")
            return
        try:
            payload = json.dumps(state_to_document(state))
            await asyncio.to_thread(self.storage.put, self.key, payload)
        except Exception:
            logger.exception("state_save_failed", key=self.key)
            return
        logger.debug("state_saved", key=self.key, transactions=len(state.transactions))

    async def load(self) -> Optional[AppState]:
        """Read and normalize the stored state document.

        Returns:
            The stored state, or None when nothing usable is stored
        """
        if not await self.open():
            return None
        try:
            payload = await asyncio.to_thread(self.storage.get, self.key)
        except Exception:
            logger.exception("state_load_failed", key=self.key)
            return None

        if payload is None:
            logger.info("state_not_found", key=self.key)
            return None

        try:
            state = normalize_document(json.loads(payload))
        except Exception:
            logger.exception("state_document_invalid", key=self.key)
            return None

        logger.info("state_loaded", key=self.key, transactions=len(state.transactions))
        return state


async def hydrate(store: AppStore, adapter: PersistenceAdapter) -> bool:
    """Replace the store's state with the persisted one, if any.

    Returns:
        True if a stored state was loaded
    """
    state = await adapter.load()
    if state is None:
        return False
    store.dispatch(actions.load_data(state))
    return True


class DebouncedSaver:
    """Schedules state writes after a quiet period.

    Must be used from code running inside an asyncio event loop. Writes are
    serialized: a write never starts before the previous one has finished.
    """

    def __init__(self, adapter: PersistenceAdapter, delay: float = DEFAULT_SAVE_DELAY):
        """Initialize the saver.

        Args:
            adapter: Adapter performing the writes
            delay: Quiet period in seconds before a write fires
        """
        self.adapter = adapter
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[AppState] = None
        self._writer: Optional[asyncio.Task] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def has_pending(self) -> bool:
        """Whether a write is scheduled but has not fired yet."""
        return self._handle is not None

    def schedule(self, state: AppState) -> None:
        """Schedule a write of ``state``, superseding any pending write."""
        loop = asyncio.get_running_loop()
        self.cancel()
        self._pending = state
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending write, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending = None

    def watch(self, store: AppStore) -> Callable[[], None]:
        """Schedule a write after every change of the store's state.

        Returns:
            A callable that stops watching
        """
        self._unsubscribe = store.subscribe(self.schedule)
        return self._unsubscribe

    def _fire(self) -> None:
        state = self._pending
        self._handle = None
        self._pending = None
        if state is not None:
            self._start_write(state)

    def _start_write(self, state: AppState) -> None:
        previous = self._writer
        self._writer = asyncio.get_running_loop().create_task(self._write(state, previous))

    async def _write(self, state: AppState, previous: Optional[asyncio.Task]) -> None:
        if previous is not None:
            await previous
        await self.adapter.save(state)

    async def flush(self) -> None:
        """Write the pending state now and wait for all writes to finish."""
        if self._handle is not None:
            state = self._pending
            self.cancel()
            if state is not None:
                self._start_write(state)
        if self._writer is not None:
            await self._writer

    async def shutdown(self, flush: bool = False) -> None:
        """Stop watching, cancel or flush the pending write, and wait.

        Args:
            flush: Write the pending state instead of dropping it
        """
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if flush:
            await self.flush()
            return
        self.cancel()
        if self._writer is not None:
            await self._writer
