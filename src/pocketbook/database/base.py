"""Abstract state storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class StateStorage(ABC):
    """Abstract key-value storage holding serialized state documents."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create the backing table if needed. Safe to call repeatedly."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key, or None if absent."""
        pass

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value atomically."""
        pass
