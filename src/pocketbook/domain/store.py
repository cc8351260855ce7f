"""Owned application state container."""

from typing import Callable, Optional

import structlog

from pocketbook.domain.actions import Action
from pocketbook.domain.entities import AppState, initial_state
from pocketbook.domain.reducer import reduce

logger = structlog.get_logger(__name__)

Listener = Callable[[AppState], None]


class AppStore:
    """Holds the current AppState and applies actions to it.

    All mutations go through dispatch(), which runs the pure reducer. Each
    dispatch that yields a new state object bumps ``version`` once and
    notifies subscribers in dispatch order.
    """

    def __init__(self, state: Optional[AppState] = None):
        """Initialize the store.

        Args:
            state: Starting state (defaults to initial_state())
        """
        self._state = state if state is not None else initial_state()
        self._version = 0
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    def dispatch(self, action: Action) -> AppState:
        """Apply an action and notify subscribers if the state changed.

        Returns:
            The state after the action
        """
        new_state = reduce(self._state, action)
        if new_state is self._state:
            return new_state

        self._state = new_state
        self._version += 1
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("state_listener_failed", version=self._version)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new state.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
