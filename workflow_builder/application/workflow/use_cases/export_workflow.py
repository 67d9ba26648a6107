from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.ports.secondary.snapshot_store import ISnapshotStore
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class ExportWorkflowUseCase:
    """
    Use case for exporting the present snapshot of a session.

    The record is ``{"name": ..., "workflow": {"rootId": ..., "nodes": {...}}}``,
    the same shape ImportWorkflowUseCase accepts.
    """
    def __init__(
        self,
        session_repository: ISessionRepository,
        snapshot_store: ISnapshotStore | None = None,
    ):
        self._session_repository = session_repository
        self._snapshot_store = snapshot_store

    def execute(self, session_id: str) -> dict:
        session = self._session_repository.get_or_raise(session_id)
        return session.to_export()

    def write(self, session_id: str) -> str:
        """Saves the export record through the snapshot store and returns its location."""
        if self._snapshot_store is None:
            raise RuntimeError("ExportWorkflowUseCase was built without a snapshot store")

        session = self._session_repository.get_or_raise(session_id)
        location = self._snapshot_store.save(session.name, session.to_export())

        logger.info("workflow_exported", session_id=session_id, location=location)
        return location
