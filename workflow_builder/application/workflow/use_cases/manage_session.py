from workflow_builder.domain.workflow.entities.session import WorkflowSession
from workflow_builder.domain.workflow.exceptions import SessionNotFoundError
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class RenameSessionUseCase:
    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str, name: str) -> WorkflowSession:
        """Renames the workflow. The name is session metadata and not part of history."""
        session = self._session_repository.get_or_raise(session_id)
        session.rename(name)
        self._session_repository.save(session)

        logger.info("session_renamed", session_id=session_id, workflow_name=session.name)
        return session


class CloseSessionUseCase:
    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str) -> None:
        if not self._session_repository.delete(session_id):
            raise SessionNotFoundError(session_id)
        logger.info("session_closed", session_id=session_id)
