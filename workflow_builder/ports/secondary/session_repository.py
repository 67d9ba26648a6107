from abc import ABC, abstractmethod

from workflow_builder.domain.workflow.entities.session import WorkflowSession
from workflow_builder.domain.workflow.exceptions import SessionNotFoundError


class ISessionRepository(ABC):
    """
    Interface for storage of editing sessions.

    Implementations are synchronous: every call completes without yielding, so
    commands issued from a single event loop are applied one at a time.
    """

    @abstractmethod
    def save(self, session: WorkflowSession) -> None:
        """Persists a new or updated session."""
        pass

    @abstractmethod
    def get_by_id(self, session_id: str) -> WorkflowSession | None:
        """Retrieves a session by its unique ID."""
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Removes a session. Returns False if it did not exist."""
        pass

    @abstractmethod
    def list_ids(self) -> list[str]:
        pass

    def get_or_raise(self, session_id: str) -> WorkflowSession:
        session = self.get_by_id(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session
