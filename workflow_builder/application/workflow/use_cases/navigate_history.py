from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class UndoUseCase:
    """Steps back one snapshot. A no-op when there is nothing to undo."""

    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str) -> tuple[bool, Workflow]:
        session = self._session_repository.get_or_raise(session_id)
        applied = session.undo()
        if applied:
            self._session_repository.save(session)

        logger.info(
            "undo_applied" if applied else "undo_skipped",
            session_id=session_id,
            past=len(session.history.past),
            future=len(session.history.future),
        )
        return applied, session.present


class RedoUseCase:
    """Re-applies the nearest undone snapshot. A no-op when the redo stack is empty."""

    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str) -> tuple[bool, Workflow]:
        session = self._session_repository.get_or_raise(session_id)
        applied = session.redo()
        if applied:
            self._session_repository.save(session)

        logger.info(
            "redo_applied" if applied else "redo_skipped",
            session_id=session_id,
            past=len(session.history.past),
            future=len(session.history.future),
        )
        return applied, session.present
