from workflow_builder.domain.workflow.entities.session import WorkflowSession
from workflow_builder.ports.secondary.session_repository import ISessionRepository


class InMemorySessionRepository(ISessionRepository):
    """Process-local session store. Sessions live until deleted or the process exits."""

    def __init__(self):
        self._sessions: dict[str, WorkflowSession] = {}

    def save(self, session: WorkflowSession) -> None:
        self._sessions[session.id] = session

    def get_by_id(self, session_id: str) -> WorkflowSession | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def list_ids(self) -> list[str]:
        return list(self._sessions)
