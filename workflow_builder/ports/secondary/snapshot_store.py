from abc import ABC, abstractmethod


class ISnapshotStore(ABC):
    """
    Interface for saving and loading exported workflow records.

    A record has the shape ``{"name": str, "workflow": {"rootId": ..., "nodes": {...}}}``.
    """

    @abstractmethod
    def save(self, name: str, record: dict) -> str:
        """Stores a record under ``name`` and returns its location."""
        pass

    @abstractmethod
    def load(self, name: str) -> dict:
        """Loads the record stored under ``name``."""
        pass

    @abstractmethod
    def list_names(self) -> list[str]:
        pass
